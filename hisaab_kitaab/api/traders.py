"""
Trader and bank API endpoints.

Banks are nested under their trader; a bank requested under the
wrong trader is a 404.
"""

from fastapi import APIRouter, Depends

from hisaab_kitaab.auth.dependencies import get_current_user
from hisaab_kitaab.models.repository import Repository, get_repository
from hisaab_kitaab.services.bank_service import BankBalance, BankService
from hisaab_kitaab.services.trader_service import TraderBalance, TraderService
from hisaab_kitaab.schemas.common import MessageResponse
from hisaab_kitaab.schemas.trader import (
    BankCreate,
    BankResponse,
    BankUpdate,
    TraderCreate,
    TraderResponse,
    TraderUpdate,
)

router = APIRouter(
    prefix="/api/traders",
    tags=["Traders"],
    dependencies=[Depends(get_current_user)],
)


def _bank_response(balance: BankBalance) -> BankResponse:
    bank = balance.bank
    return BankResponse(
        id=bank.id,
        trader_id=bank.trader_id,
        name=bank.name,
        code=bank.code,
        entry_count=balance.entry_count,
        total_balance=balance.total_balance,
        created_at=bank.created_at,
    )


def _trader_response(balance: TraderBalance) -> TraderResponse:
    trader = balance.trader
    return TraderResponse(
        id=trader.id,
        name=trader.name,
        short_name=trader.short_name,
        color=trader.color,
        total_balance=balance.total_balance,
        banks=[_bank_response(b) for b in balance.banks],
        created_at=trader.created_at,
    )


# --- Trader Endpoints ---

@router.get("", response_model=list[TraderResponse])
def list_traders(repo: Repository = Depends(get_repository)):
    """All traders with their banks and balances."""
    service = TraderService(repo)
    return [_trader_response(t) for t in service.list_traders()]


@router.post("", response_model=TraderResponse, status_code=201)
def create_trader(
    request: TraderCreate,
    repo: Repository = Depends(get_repository),
):
    service = TraderService(repo)
    trader = service.create_trader(request)
    repo.commit()
    return _trader_response(service.get_trader_balance(trader.id))


@router.get("/{trader_id}", response_model=TraderResponse)
def get_trader(
    trader_id: int,
    repo: Repository = Depends(get_repository),
):
    service = TraderService(repo)
    return _trader_response(service.get_trader_balance(trader_id))


@router.put("/{trader_id}", response_model=TraderResponse)
def update_trader(
    trader_id: int,
    request: TraderUpdate,
    repo: Repository = Depends(get_repository),
):
    service = TraderService(repo)
    service.update_trader(trader_id, request)
    repo.commit()
    return _trader_response(service.get_trader_balance(trader_id))


@router.delete("/{trader_id}", response_model=MessageResponse)
def delete_trader(
    trader_id: int,
    repo: Repository = Depends(get_repository),
):
    """Delete a trader with all of its banks and ledger entries."""
    service = TraderService(repo)
    service.delete_trader(trader_id)
    repo.commit()
    return MessageResponse(
        message="Trader and all associated data deleted successfully"
    )


# --- Bank Endpoints ---

@router.get("/{trader_id}/banks", response_model=list[BankResponse])
def list_banks(
    trader_id: int,
    repo: Repository = Depends(get_repository),
):
    service = BankService(repo)
    return [_bank_response(b) for b in service.list_banks(trader_id)]


@router.post(
    "/{trader_id}/banks", response_model=BankResponse, status_code=201
)
def create_bank(
    trader_id: int,
    request: BankCreate,
    repo: Repository = Depends(get_repository),
):
    service = BankService(repo)
    bank = service.create_bank(trader_id, request)
    repo.commit()
    return _bank_response(service.get_bank_balance(trader_id, bank.id))


@router.get("/{trader_id}/banks/{bank_id}", response_model=BankResponse)
def get_bank(
    trader_id: int,
    bank_id: int,
    repo: Repository = Depends(get_repository),
):
    service = BankService(repo)
    return _bank_response(service.get_bank_balance(trader_id, bank_id))


@router.put("/{trader_id}/banks/{bank_id}", response_model=BankResponse)
def update_bank(
    trader_id: int,
    bank_id: int,
    request: BankUpdate,
    repo: Repository = Depends(get_repository),
):
    service = BankService(repo)
    service.update_bank(trader_id, bank_id, request)
    repo.commit()
    return _bank_response(service.get_bank_balance(trader_id, bank_id))


@router.delete(
    "/{trader_id}/banks/{bank_id}", response_model=MessageResponse
)
def delete_bank(
    trader_id: int,
    bank_id: int,
    repo: Repository = Depends(get_repository),
):
    """Delete a bank with all of its ledger entries."""
    service = BankService(repo)
    service.delete_bank(trader_id, bank_id)
    repo.commit()
    return MessageResponse(
        message="Bank and all associated ledger entries deleted successfully"
    )
