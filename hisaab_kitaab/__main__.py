"""Run the API server: python -m hisaab_kitaab"""

import uvicorn

from hisaab_kitaab.config import get_settings

settings = get_settings()

uvicorn.run(
    "hisaab_kitaab.main:app",
    host=settings.HOST,
    port=settings.PORT,
    reload=settings.DEBUG,
)
