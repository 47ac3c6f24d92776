"""
Form validation.

Every validate_*_form function takes the submitted form as a dict with
snake_case keys and returns a mapping of field name to message. An empty
mapping means the form is valid.
"""
import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from medtrack.core.exceptions import FormValidationError
from medtrack.schemas.contract import CURRENCIES, ContractType, ServiceFrequency
from medtrack.schemas.device import ContractCoverage, DeviceStatus
from medtrack.schemas.photo_log import ALLOWED_MIME_TYPES, MAX_UPLOAD_BYTES
from medtrack.schemas.service_visit import VisitPurpose

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^\+?[1-9]\d{0,15}$")
DEVICE_ID_RE = re.compile(r"^[A-Za-z0-9\-]+$")
SERIAL_RE = re.compile(r"^[A-Za-z0-9]+$")
CONTRACT_NUMBER_RE = re.compile(r"^(AMC|CMC)-\d{4}-\d{3}$")
ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def validate_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email))


def validate_phone(phone: str) -> bool:
    return bool(PHONE_RE.match(re.sub(r"[\s\-()]", "", phone)))


def validate_required(value: Any) -> bool:
    return value is not None and str(value).strip() != ""


def validate_max_length(value: Any, max_length: int) -> bool:
    return not value or len(str(value)) <= max_length


def validate_number(value: Any, min_value: Optional[float] = None, max_value: Optional[float] = None) -> bool:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return False
    if number != number:  # NaN
        return False
    if min_value is not None and number < min_value:
        return False
    if max_value is not None and number > max_value:
        return False
    return True


def parse_date(value: Any) -> Optional[date]:
    """Return the calendar date for a date, datetime or YYYY-MM-DD string; None otherwise."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not ISO_DATE_RE.match(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def validate_date(value: Any) -> bool:
    return parse_date(value) is not None


def validate_date_range(start: Any, end: Any) -> bool:
    start_day, end_day = parse_date(start), parse_date(end)
    if start_day is None or end_day is None:
        return False
    return start_day <= end_day


def validate_device_id(device_id: str) -> bool:
    return bool(DEVICE_ID_RE.match(device_id))


def validate_serial_number(serial_number: str) -> bool:
    return bool(SERIAL_RE.match(serial_number))


def validate_contract_number(contract_number: str) -> bool:
    return bool(CONTRACT_NUMBER_RE.match(contract_number))


def _check_choice(errors: Dict[str, str], data: Dict[str, Any], field: str, choices, label: str) -> None:
    value = data.get(field)
    if value in (None, ""):
        return
    allowed = [getattr(choice, "value", choice) for choice in choices]
    if getattr(value, "value", value) not in allowed:
        errors[field] = f"{label} must be one of: {', '.join(allowed)}"


def ensure_valid(errors: Dict[str, str]) -> None:
    """Reject a submission when any field failed."""
    if errors:
        raise FormValidationError(errors)


# ─────────────────────── Forms ───────────────────────

def validate_device_form(data: Dict[str, Any]) -> Dict[str, str]:
    errors: Dict[str, str] = {}

    if not validate_required(data.get("device_id")):
        errors["device_id"] = "Device ID is required"
    elif not validate_device_id(str(data["device_id"])):
        errors["device_id"] = "Device ID must be alphanumeric with optional hyphens"

    if not validate_required(data.get("type")):
        errors["type"] = "Device type is required"

    if not validate_required(data.get("model")):
        errors["model"] = "Model is required"
    elif not validate_max_length(data["model"], 100):
        errors["model"] = "Model must be less than 100 characters"

    if not validate_required(data.get("serial_number")):
        errors["serial_number"] = "Serial number is required"
    elif not validate_serial_number(str(data["serial_number"])):
        errors["serial_number"] = "Serial number must be alphanumeric"

    if not validate_required(data.get("facility_id")):
        errors["facility_id"] = "Facility is required"

    if not validate_required(data.get("location")):
        errors["location"] = "Location is required"

    if not validate_required(data.get("manufacturer")):
        errors["manufacturer"] = "Manufacturer is required"

    if not validate_number(data.get("battery_level"), 0, 100):
        errors["battery_level"] = "Battery level must be between 0 and 100"

    _check_choice(errors, data, "status", DeviceStatus, "Status")
    _check_choice(errors, data, "amc_status", ContractCoverage, "AMC status")
    _check_choice(errors, data, "cmc_status", ContractCoverage, "CMC status")

    for field, label in (
        ("purchase_date", "purchase date"),
        ("warranty_expiry", "warranty expiry date"),
        ("last_service_date", "last service date"),
        ("last_installation_date", "last installation date"),
    ):
        if data.get(field) and not validate_date(data[field]):
            errors[field] = f"Invalid {label}"

    if (
        data.get("purchase_date")
        and data.get("warranty_expiry")
        and "purchase_date" not in errors
        and "warranty_expiry" not in errors
        and not validate_date_range(data["purchase_date"], data["warranty_expiry"])
    ):
        errors["warranty_expiry"] = "Warranty expiry must be after purchase date"

    return errors


def validate_installation_form(data: Dict[str, Any]) -> Dict[str, str]:
    errors: Dict[str, str] = {}

    if not validate_required(data.get("device_id")):
        errors["device_id"] = "Device is required"

    if not validate_required(data.get("installation_date")):
        errors["installation_date"] = "Installation date is required"
    elif not validate_date(data["installation_date"]):
        errors["installation_date"] = "Invalid installation date"

    if data.get("training_date") and not validate_date(data["training_date"]):
        errors["training_date"] = "Invalid training date"

    if not validate_required(data.get("engineer_id")):
        errors["engineer_id"] = "Engineer ID is required"

    if not validate_required(data.get("engineer_name")):
        errors["engineer_name"] = "Engineer name is required"

    return errors


def validate_service_visit_form(data: Dict[str, Any]) -> Dict[str, str]:
    errors: Dict[str, str] = {}

    if not validate_required(data.get("device_id")):
        errors["device_id"] = "Device is required"

    if not validate_required(data.get("visit_date")):
        errors["visit_date"] = "Visit date is required"
    elif not validate_date(data["visit_date"]):
        errors["visit_date"] = "Invalid visit date"

    if not validate_required(data.get("engineer_id")):
        errors["engineer_id"] = "Engineer ID is required"

    if not validate_required(data.get("engineer_name")):
        errors["engineer_name"] = "Engineer name is required"

    if not validate_required(data.get("purpose")):
        errors["purpose"] = "Purpose is required"
    else:
        _check_choice(errors, data, "purpose", VisitPurpose, "Purpose")

    if not validate_required(data.get("description")):
        errors["description"] = "Description is required"

    if validate_required(data.get("time_spent")) and not validate_number(data["time_spent"], 0):
        errors["time_spent"] = "Time spent must be a positive number"

    if data.get("next_service_date"):
        if not validate_date(data["next_service_date"]):
            errors["next_service_date"] = "Invalid next service date"
        elif "visit_date" not in errors and not validate_date_range(
            data["visit_date"], data["next_service_date"]
        ):
            errors["next_service_date"] = "Next service date must be after visit date"

    return errors


def validate_contract_form(data: Dict[str, Any]) -> Dict[str, str]:
    errors: Dict[str, str] = {}

    if not validate_required(data.get("contract_number")):
        errors["contract_number"] = "Contract number is required"
    elif not validate_contract_number(str(data["contract_number"])):
        errors["contract_number"] = "Contract number format: AMC-YYYY-NNN or CMC-YYYY-NNN"

    if not validate_required(data.get("type")):
        errors["type"] = "Contract type is required"
    else:
        _check_choice(errors, data, "type", ContractType, "Contract type")

    if not validate_required(data.get("device_id")):
        errors["device_id"] = "Device is required"

    if not validate_required(data.get("start_date")):
        errors["start_date"] = "Start date is required"
    elif not validate_date(data["start_date"]):
        errors["start_date"] = "Invalid start date"

    if not validate_required(data.get("end_date")):
        errors["end_date"] = "End date is required"
    elif not validate_date(data["end_date"]):
        errors["end_date"] = "Invalid end date"

    if (
        "start_date" not in errors
        and "end_date" not in errors
        and not validate_date_range(data["start_date"], data["end_date"])
    ):
        errors["end_date"] = "End date must be after start date"

    if not validate_number(data.get("value"), 0):
        errors["value"] = "Contract value must be a positive number"

    _check_choice(errors, data, "currency", CURRENCIES, "Currency")
    _check_choice(errors, data, "service_frequency", ServiceFrequency, "Service frequency")

    if not validate_required(data.get("contact_person")):
        errors["contact_person"] = "Contact person is required"

    if data.get("contact_email") and not validate_email(data["contact_email"]):
        errors["contact_email"] = "Invalid email address"

    if data.get("contact_phone") and not validate_phone(data["contact_phone"]):
        errors["contact_phone"] = "Invalid phone number"

    if not validate_required(data.get("vendor")):
        errors["vendor"] = "Vendor is required"

    if data.get("vendor_contact") and not validate_email(data["vendor_contact"]):
        errors["vendor_contact"] = "Invalid vendor contact email"

    return errors


def validate_facility_form(data: Dict[str, Any]) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    address = data.get("address") or {}
    contact_info = data.get("contact_info") or {}
    primary = data.get("primary_contact") or {}
    technical = data.get("technical_contact") or {}

    if not validate_required(data.get("name")):
        errors["name"] = "Facility name is required"

    if not validate_required(data.get("type")):
        errors["type"] = "Facility type is required"

    if not validate_required(address.get("street")):
        errors["street"] = "Street address is required"

    if not validate_required(address.get("city")):
        errors["city"] = "City is required"

    if not validate_required(address.get("zip_code")):
        errors["zip_code"] = "ZIP code is required"

    if contact_info.get("email") and not validate_email(contact_info["email"]):
        errors["email"] = "Invalid email address"

    if contact_info.get("phone") and not validate_phone(contact_info["phone"]):
        errors["phone"] = "Invalid phone number"

    if primary.get("email") and not validate_email(primary["email"]):
        errors["primary_email"] = "Invalid primary contact email"

    if technical.get("email") and not validate_email(technical["email"]):
        errors["technical_email"] = "Invalid technical contact email"

    return errors


def validate_photo_upload(mime_type: Optional[str], size: Optional[int]) -> List[str]:
    """Photo uploads report a list of problems rather than a field mapping."""
    errors: List[str] = []

    if mime_type not in ALLOWED_MIME_TYPES:
        errors.append("File type not supported. Please upload JPEG, PNG, or GIF images.")

    if size is not None and size > MAX_UPLOAD_BYTES:
        errors.append("File size too large. Maximum size is 10MB.")

    return errors
