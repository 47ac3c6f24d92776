"""
AMC/CMC contract tracking.

Status is classified from the end date alone: already past -> Expired,
within the configured window (30 days by default) -> Expiring Soon,
otherwise Active. refresh_statuses re-applies the rule over the whole
collection and is safe to run any number of times.
"""
import logging
from collections import Counter
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from medtrack.core.config import settings
from medtrack.schemas.common import FileRef, utcnow
from medtrack.schemas.contract import Contract, ContractStatus, ContractType
from medtrack.schemas.filters import ContractFilters
from medtrack.services import validation
from medtrack.services.records import (
    apply_updates,
    find_by_id,
    matches_choice,
    matches_search,
    remove_by_id,
    replace_by_id,
)

logger = logging.getLogger(__name__)


def days_until_expiry(end_date: date, today: Optional[date] = None) -> int:
    return (end_date - (today or date.today())).days


def classify(end_date: date, today: Optional[date] = None, window_days: Optional[int] = None) -> ContractStatus:
    window = settings.EXPIRING_SOON_DAYS if window_days is None else window_days
    days = days_until_expiry(end_date, today)
    if days < 0:
        return ContractStatus.EXPIRED
    if days <= window:
        return ContractStatus.EXPIRING_SOON
    return ContractStatus.ACTIVE


def refresh_statuses(
    contracts: Sequence[Contract], today: Optional[date] = None, window_days: Optional[int] = None
) -> List[Contract]:
    """Recompute every contract's status; only the status field is written."""
    today = today or date.today()
    result = []
    changed = 0
    for contract in contracts:
        status = classify(contract.end_date, today, window_days)
        if status != contract.status:
            changed += 1
            contract = contract.model_copy(update={"status": status})
        result.append(contract)
    if changed:
        logger.info(f"[CONTRACT] Status refresh changed {changed} of {len(result)} contract(s)")
    return result


# ─────────────────────── Reducers ───────────────────────

def build_contract(data: Dict[str, Any], today: Optional[date] = None) -> Contract:
    """Validate a submitted contract form and create the record, classified as of *today*."""
    validation.ensure_valid(validation.validate_contract_form(data))
    now = utcnow()
    fields = {key: value for key, value in data.items() if value not in (None, "")}
    contract = Contract.model_validate(
        {**fields, "renewal_notified": False, "documents": [], "created_at": now, "updated_at": now}
    )
    return contract.model_copy(update={"status": classify(contract.end_date, today)})


def add_contract(contracts: Sequence[Contract], contract: Contract) -> List[Contract]:
    logger.info(f"[CONTRACT] Added {contract.contract_number} for device {contract.device_id}")
    return [*contracts, contract]


def update_contract(contracts: Sequence[Contract], contract_id: str, updates: Dict[str, Any]) -> List[Contract]:
    return replace_by_id(contracts, contract_id, lambda contract: apply_updates(contract, updates))


def edit_contract(contracts: Sequence[Contract], contract_id: str, updates: Dict[str, Any]) -> List[Contract]:
    """Form edit: the merged record must pass the same checks as a new contract."""
    contract = find_by_id(contracts, contract_id)
    if contract is None:
        return list(contracts)
    merged = {**contract.model_dump(), **updates}
    validation.ensure_valid(validation.validate_contract_form(merged))
    return update_contract(contracts, contract_id, updates)


def delete_contract(contracts: Sequence[Contract], contract_id: str) -> List[Contract]:
    return remove_by_id(contracts, contract_id)


def renew_contract(
    contracts: Sequence[Contract],
    contract_id: str,
    new_end_date: date,
    new_value: Optional[float] = None,
) -> List[Contract]:
    """
    Extend a contract. The status is forced to Active and the renewal
    notice flag is cleared; the new end date is taken as given.
    """
    updates: Dict[str, Any] = {
        "end_date": new_end_date,
        "status": ContractStatus.ACTIVE,
        "renewal_notified": False,
    }
    if new_value:
        updates["value"] = new_value
    logger.info(f"[CONTRACT] Renewing {contract_id} until {new_end_date}")
    return update_contract(contracts, contract_id, updates)


def mark_renewal_notified(contracts: Sequence[Contract], contract_id: str) -> List[Contract]:
    return update_contract(contracts, contract_id, {"renewal_notified": True})


def update_contract_status(contracts: Sequence[Contract], contract_id: str, status: ContractStatus) -> List[Contract]:
    """Manual override; the next refresh_statuses pass replaces it."""
    return update_contract(contracts, contract_id, {"status": status})


def add_contract_document(contracts: Sequence[Contract], contract_id: str, document: Dict[str, Any]) -> List[Contract]:
    def _attach(contract: Contract) -> Contract:
        doc = FileRef.model_validate({**document, "upload_date": utcnow()})
        return apply_updates(contract, {"documents": [*contract.documents, doc]})

    return replace_by_id(contracts, contract_id, _attach)


def remove_contract_document(contracts: Sequence[Contract], contract_id: str, document_id: str) -> List[Contract]:
    def _detach(contract: Contract) -> Contract:
        return apply_updates(contract, {"documents": remove_by_id(contract.documents, document_id)})

    return replace_by_id(contracts, contract_id, _detach)


# ─────────────────────── Selectors ───────────────────────

def get_contract(contracts: Sequence[Contract], contract_id: str) -> Optional[Contract]:
    return find_by_id(contracts, contract_id)


def contracts_for_device(contracts: Sequence[Contract], device_id: str) -> List[Contract]:
    return [contract for contract in contracts if contract.device_id == device_id]


def contracts_by_status(contracts: Sequence[Contract], status: ContractStatus) -> List[Contract]:
    return [contract for contract in contracts if contract.status == status]


def contracts_by_type(contracts: Sequence[Contract], contract_type: ContractType) -> List[Contract]:
    return [contract for contract in contracts if contract.type == contract_type]


def contracts_needing_renewal(contracts: Sequence[Contract]) -> List[Contract]:
    return [
        contract
        for contract in contracts
        if contract.status in (ContractStatus.EXPIRING_SOON, ContractStatus.EXPIRED)
        and not contract.renewal_notified
    ]


def status_counts(contracts: Sequence[Contract]) -> Dict[str, int]:
    counts = Counter(contract.status.value for contract in contracts)
    return {status.value: counts.get(status.value, 0) for status in ContractStatus}


def filter_contracts(contracts: Sequence[Contract], filters: ContractFilters) -> List[Contract]:
    return [
        contract
        for contract in contracts
        if matches_search(
            filters.search_term,
            contract.contract_number,
            contract.device_id,
            contract.device_type,
            contract.facility_name,
            contract.vendor,
        )
        and matches_choice(filters.status, contract.status)
        and matches_choice(filters.type, contract.type)
    ]
