"""Partial-update helper shared by every service."""

from pydantic import BaseModel


def apply_changes(
    instance,
    request: BaseModel,
    required: tuple[str, ...] = (),
) -> dict:
    """
    Copy the fields the client actually sent onto a model instance.

    Omitted fields keep their stored values. An explicit null is
    ignored for fields in `required` (columns that cannot be empty)
    and clears the value for everything else. Returns the changes
    that were applied.
    """
    changes = {
        field: value
        for field, value in request.model_dump(exclude_unset=True).items()
        if not (value is None and field in required)
    }
    for field, value in changes.items():
        setattr(instance, field, value)
    return changes
