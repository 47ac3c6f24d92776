"""
CSV export of record collections.

Columns are (key, label) pairs; keys use the persisted camelCase names and
may be dot paths into nested records (``address.city``). Header labels are
always quoted; data cells are quoted only when they contain the separator,
a quote or a line break.
"""
import csv
import io
import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Sequence

from pydantic import BaseModel

from medtrack.core.config import settings
from medtrack.core.exceptions import EmptyExportError
from medtrack.schemas.state import AppState

logger = logging.getLogger(__name__)


class ExportColumn(NamedTuple):
    key: str
    label: str


DEVICE_COLUMNS = [
    ExportColumn("deviceId", "Device ID"),
    ExportColumn("type", "Type"),
    ExportColumn("model", "Model"),
    ExportColumn("serialNumber", "Serial Number"),
    ExportColumn("facilityName", "Facility"),
    ExportColumn("location", "Location"),
    ExportColumn("status", "Status"),
    ExportColumn("batteryLevel", "Battery Level (%)"),
    ExportColumn("manufacturer", "Manufacturer"),
    ExportColumn("purchaseDate", "Purchase Date"),
    ExportColumn("warrantyExpiry", "Warranty Expiry"),
    ExportColumn("lastServiceDate", "Last Service Date"),
    ExportColumn("lastInstallationDate", "Last Installation Date"),
    ExportColumn("amcStatus", "AMC Status"),
    ExportColumn("cmcStatus", "CMC Status"),
    ExportColumn("notes", "Notes"),
]

INSTALLATION_COLUMNS = [
    ExportColumn("deviceId", "Device ID"),
    ExportColumn("deviceType", "Device Type"),
    ExportColumn("facilityName", "Facility"),
    ExportColumn("installationDate", "Installation Date"),
    ExportColumn("engineerName", "Engineer"),
    ExportColumn("status", "Status"),
    ExportColumn("trainingCompleted", "Training Completed"),
    ExportColumn("trainingDate", "Training Date"),
    ExportColumn("completionDate", "Completion Date"),
    ExportColumn("notes", "Notes"),
]

SERVICE_VISIT_COLUMNS = [
    ExportColumn("deviceId", "Device ID"),
    ExportColumn("deviceType", "Device Type"),
    ExportColumn("facilityName", "Facility"),
    ExportColumn("visitDate", "Visit Date"),
    ExportColumn("engineerName", "Engineer"),
    ExportColumn("purpose", "Purpose"),
    ExportColumn("status", "Status"),
    ExportColumn("description", "Description"),
    ExportColumn("timeSpent", "Time Spent (minutes)"),
    ExportColumn("nextServiceDate", "Next Service Date"),
    ExportColumn("customerSignature", "Customer Signature"),
    ExportColumn("completionDate", "Completion Date"),
    ExportColumn("notes", "Notes"),
]

CONTRACT_COLUMNS = [
    ExportColumn("contractNumber", "Contract Number"),
    ExportColumn("type", "Type"),
    ExportColumn("deviceId", "Device ID"),
    ExportColumn("deviceType", "Device Type"),
    ExportColumn("facilityName", "Facility"),
    ExportColumn("startDate", "Start Date"),
    ExportColumn("endDate", "End Date"),
    ExportColumn("status", "Status"),
    ExportColumn("value", "Value"),
    ExportColumn("currency", "Currency"),
    ExportColumn("serviceFrequency", "Service Frequency"),
    ExportColumn("contactPerson", "Contact Person"),
    ExportColumn("contactEmail", "Contact Email"),
    ExportColumn("contactPhone", "Contact Phone"),
    ExportColumn("vendor", "Vendor"),
    ExportColumn("vendorContact", "Vendor Contact"),
    ExportColumn("autoRenewal", "Auto Renewal"),
    ExportColumn("notes", "Notes"),
]

PHOTO_LOG_COLUMNS = [
    ExportColumn("filename", "Filename"),
    ExportColumn("description", "Description"),
    ExportColumn("deviceId", "Device ID"),
    ExportColumn("deviceType", "Device Type"),
    ExportColumn("facilityName", "Facility"),
    ExportColumn("category", "Category"),
    ExportColumn("uploadDate", "Upload Date"),
    ExportColumn("uploadedBy", "Uploaded By"),
    ExportColumn("location", "Location"),
    ExportColumn("isAlert", "Is Alert"),
    ExportColumn("alertLevel", "Alert Level"),
    ExportColumn("tags", "Tags"),
    ExportColumn("notes", "Notes"),
]

FACILITY_COLUMNS = [
    ExportColumn("id", "Facility ID"),
    ExportColumn("name", "Name"),
    ExportColumn("type", "Type"),
    ExportColumn("address.street", "Street Address"),
    ExportColumn("address.city", "City"),
    ExportColumn("address.state", "State"),
    ExportColumn("address.zipCode", "ZIP Code"),
    ExportColumn("address.country", "Country"),
    ExportColumn("contactInfo.phone", "Phone"),
    ExportColumn("contactInfo.email", "Email"),
    ExportColumn("primaryContact.name", "Primary Contact"),
    ExportColumn("primaryContact.email", "Primary Contact Email"),
    ExportColumn("technicalContact.name", "Technical Contact"),
    ExportColumn("technicalContact.email", "Technical Contact Email"),
    ExportColumn("status", "Status"),
    ExportColumn("deviceCount", "Device Count"),
    ExportColumn("lastVisitDate", "Last Visit Date"),
    ExportColumn("notes", "Notes"),
]

# Attribute name on AppState -> (file prefix, columns)
EXPORTS: Dict[str, tuple] = {
    "devices": ("devices", DEVICE_COLUMNS),
    "installations": ("installations", INSTALLATION_COLUMNS),
    "service_visits": ("service_visits", SERVICE_VISIT_COLUMNS),
    "contracts": ("contracts", CONTRACT_COLUMNS),
    "photo_logs": ("photo_logs", PHOTO_LOG_COLUMNS),
    "facilities": ("facilities", FACILITY_COLUMNS),
}


def get_nested_value(record: Mapping[str, Any], path: str) -> Any:
    current: Any = record
    for key in path.split("."):
        if not isinstance(current, Mapping) or current.get(key) is None:
            return None
        current = current[key]
    return current


def format_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _as_mapping(record: Any) -> Mapping[str, Any]:
    if isinstance(record, BaseModel):
        return record.model_dump(mode="json", by_alias=True)
    return record


def to_csv(records: Sequence[Any], columns: Sequence[ExportColumn], separator: Optional[str] = None) -> str:
    """Render *records* as CSV text. Raises EmptyExportError when there is nothing to write."""
    if not records:
        raise EmptyExportError()
    separator = separator or settings.CSV_SEPARATOR

    buffer = io.StringIO()
    header = csv.writer(buffer, delimiter=separator, quoting=csv.QUOTE_ALL, lineterminator="\r\n")
    # "\r\n" as terminator so both line-break characters force quoting
    writer = csv.writer(buffer, delimiter=separator, quoting=csv.QUOTE_MINIMAL, lineterminator="\r\n")

    def _line(cells: List[str], row_writer) -> str:
        buffer.seek(0)
        buffer.truncate()
        row_writer.writerow(cells)
        return buffer.getvalue()[:-2]

    lines = [_line([column.label for column in columns], header)]
    for record in records:
        data = _as_mapping(record)
        cells = [format_cell(get_nested_value(data, column.key)) for column in columns]
        # csv quotes a lone empty field
        lines.append("" if cells == [""] else _line(cells, writer))

    return "\n".join(lines)


def _photo_log_rows(photo_logs: Sequence[Any]) -> List[Dict[str, Any]]:
    rows = []
    for photo in photo_logs:
        data = dict(_as_mapping(photo))
        data["tags"] = ", ".join(data.get("tags") or [])
        data["isAlert"] = "Yes" if data.get("isAlert") else "No"
        rows.append(data)
    return rows


def export_filename(collection: str, today: Optional[date] = None) -> str:
    prefix, _ = EXPORTS[collection]
    return f"{prefix}_export_{(today or date.today()).isoformat()}.csv"


def export_collection(state: AppState, collection: str, separator: Optional[str] = None) -> str:
    """CSV for one named collection using its predefined columns."""
    if collection not in EXPORTS:
        raise KeyError(collection)
    _, columns = EXPORTS[collection]
    records = getattr(state, collection)
    if collection == "photo_logs":
        records = _photo_log_rows(records)
    return to_csv(records, columns, separator)


def write_export(
    state: AppState,
    collection: str,
    directory: Optional[str] = None,
    today: Optional[date] = None,
) -> Path:
    content = export_collection(state, collection)
    target_dir = Path(directory or settings.EXPORT_DIR)
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / export_filename(collection, today)
    path.write_text(content, encoding="utf-8")
    logger.info(f"[EXPORT] Wrote {len(getattr(state, collection))} {collection} record(s) to {path}")
    return path


def export_all(state: AppState, directory: Optional[str] = None, today: Optional[date] = None) -> List[Path]:
    """One file per non-empty collection."""
    return [
        write_export(state, collection, directory, today)
        for collection in EXPORTS
        if getattr(state, collection)
    ]
