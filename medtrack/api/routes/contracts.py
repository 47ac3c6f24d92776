"""
AMC/CMC contract routes: CRUD, renewal, status refresh and documents.
"""
import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from medtrack.api.deps import get_or_404, get_store
from medtrack.schemas.common import ALL, FileRefIn
from medtrack.schemas.contract import ContractCreate, ContractRenewal, ContractStatusUpdate, ContractUpdate
from medtrack.schemas.filters import ContractFilters
from medtrack.services import contract_service
from medtrack.services.store import AppStore

router = APIRouter(tags=["contracts"])
logger = logging.getLogger(__name__)


def _contract_or_404(store: AppStore, contract_id: str):
    return get_or_404(contract_service.get_contract(store.state.contracts, contract_id), "Contract")


def _dispatch(store: AppStore, reducer, contract_id: str, *args):
    _contract_or_404(store, contract_id)
    state = store.dispatch("contracts", reducer, contract_id, *args)
    return contract_service.get_contract(state.contracts, contract_id)


@router.get("/")
def list_contracts(
    search: str = "",
    status_filter: str = Query(ALL, alias="status"),
    type: str = ALL,
    device_id: Optional[str] = None,
    store: AppStore = Depends(get_store),
):
    contracts = store.state.contracts
    if device_id:
        contracts = contract_service.contracts_for_device(contracts, device_id)
    filters = ContractFilters(search_term=search, status=status_filter, type=type)
    return contract_service.filter_contracts(contracts, filters)


@router.get("/summary")
def contract_summary(store: AppStore = Depends(get_store)):
    contracts = store.state.contracts
    return {
        "total": len(contracts),
        "by_status": contract_service.status_counts(contracts),
        "needing_renewal": contract_service.contracts_needing_renewal(contracts),
    }


@router.post("/refresh-statuses")
def refresh_statuses(today: Optional[date] = None, store: AppStore = Depends(get_store)):
    """Re-classify every contract against today's date (or the one given)."""
    state = store.refresh_contract_statuses(today)
    return {"success": True, "by_status": contract_service.status_counts(state.contracts)}


@router.get("/{contract_id}")
def get_contract(contract_id: str, store: AppStore = Depends(get_store)):
    contract = _contract_or_404(store, contract_id)
    return {
        **contract.model_dump(mode="json", by_alias=True),
        "daysUntilExpiry": contract_service.days_until_expiry(contract.end_date),
    }


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_contract(contract_in: ContractCreate, store: AppStore = Depends(get_store)):
    contract = contract_service.build_contract(contract_in.model_dump())
    store.dispatch("contracts", contract_service.add_contract, contract)
    return contract


@router.put("/{contract_id}")
def update_contract(contract_id: str, contract_in: ContractUpdate, store: AppStore = Depends(get_store)):
    return _dispatch(store, contract_service.edit_contract, contract_id, contract_in.model_dump(exclude_unset=True))


@router.post("/{contract_id}/renew")
def renew_contract(contract_id: str, payload: ContractRenewal, store: AppStore = Depends(get_store)):
    return _dispatch(store, contract_service.renew_contract, contract_id, payload.new_end_date, payload.new_value)


@router.post("/{contract_id}/renewal-notified")
def mark_renewal_notified(contract_id: str, store: AppStore = Depends(get_store)):
    return _dispatch(store, contract_service.mark_renewal_notified, contract_id)


@router.patch("/{contract_id}/status")
def update_contract_status(contract_id: str, payload: ContractStatusUpdate, store: AppStore = Depends(get_store)):
    return _dispatch(store, contract_service.update_contract_status, contract_id, payload.status)


@router.post("/{contract_id}/documents")
def add_contract_document(contract_id: str, document_in: FileRefIn, store: AppStore = Depends(get_store)):
    return _dispatch(store, contract_service.add_contract_document, contract_id, document_in.model_dump())


@router.delete("/{contract_id}/documents/{document_id}")
def remove_contract_document(contract_id: str, document_id: str, store: AppStore = Depends(get_store)):
    return _dispatch(store, contract_service.remove_contract_document, contract_id, document_id)


@router.delete("/{contract_id}")
def delete_contract(contract_id: str, store: AppStore = Depends(get_store)):
    _contract_or_404(store, contract_id)
    store.dispatch("contracts", contract_service.delete_contract, contract_id)
    return {"success": True, "message": "Contract deleted"}
