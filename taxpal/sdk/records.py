"""
Records management for income and expense entries.

This module contains all business logic for records storage and validation.
CLI and MCP tools should be thin wrappers that call these functions.

Storage layout
--------------

Each entry is one JSON file under the data directory:

    records/{year}/income/{id}.json
    records/{year}/expenses/{id}.json

with the shape {"meta": {...}, "data": {...}}. `meta` carries the record
type, year, added_at and (after an edit) updated_at; `data` is the
validated entry (IncomeRecord or ExpenseRecord fields). The year directory
always matches the entry's date, so a year's totals only need to read one
directory. Editing the date into another year moves the file.

IDs are 8 hex characters derived from the content and the time the entry
was added. Two identical payments on the same day are legitimate and get
different IDs.
"""

import hashlib
import json
import logging
import os
import re
from datetime import date as Date, datetime
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from .config import get_data_path
from .schemas import ExpenseRecord, IncomeRecord, YearTotals

# Configure logging based on LOG_LEVEL environment variable
_log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, _log_level, logging.INFO),
    format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
    datefmt="%H:%M:%S"
)
logger = logging.getLogger(__name__)

RecordType = Literal["income", "expense"]

# Directory name per record type
_TYPE_DIRS = {
    "income": "income",
    "expense": "expenses",
}

_MODELS = {
    "income": IncomeRecord,
    "expense": ExpenseRecord,
}

Entry = Union[IncomeRecord, ExpenseRecord]

# IDs are the first 8 hex chars of a sha256 digest
_RECORD_ID_RE = re.compile(r"^[0-9a-f]{8}$")

SORT_FIELDS = ("date", "amount", "description")


# =============================================================================
# VALIDATION
# =============================================================================

class ValidationError(Exception):
    """Raised when a record fails validation."""
    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__(f"Validation failed: {'; '.join(errors)}")


def validate_record(record_type: RecordType, data: Dict[str, Any]) -> Entry:
    """Validate entry data for a record type.

    Args:
        record_type: "income" or "expense"
        data: Entry fields

    Returns:
        The validated IncomeRecord or ExpenseRecord

    Raises:
        ValidationError: With one message per problem found
    """
    if record_type not in _MODELS:
        raise ValidationError([f"record type must be one of {tuple(_MODELS)}, got: {record_type}"])

    try:
        return _MODELS[record_type].model_validate(data)
    except PydanticValidationError as e:
        errors = []
        for err in e.errors():
            path = ".".join(str(p) for p in err["loc"]) if err["loc"] else "root"
            errors.append(f"{path}: {err['msg']}")
        raise ValidationError(errors) from e


# =============================================================================
# STORAGE
# =============================================================================

def get_records_dir() -> Path:
    """Get the records base directory.

    Returns:
        Path to records directory (~/.local/share/taxpal/records/ by default)
    """
    records_dir = get_data_path() / "records"
    records_dir.mkdir(parents=True, exist_ok=True)
    return records_dir


def _generate_record_id(record_type: RecordType, data: Dict[str, Any], added_at: str) -> str:
    """Generate an 8-char record ID from content and the time it was added."""
    key = f"{record_type}|{json.dumps(data, sort_keys=True)}|{added_at}"
    return hashlib.sha256(key.encode()).hexdigest()[:8]


def add_record(record_type: RecordType, data: Dict[str, Any]) -> Dict[str, Any]:
    """Validate and save an income or expense entry.

    Args:
        record_type: "income" or "expense"
        data: Entry fields (see IncomeRecord / ExpenseRecord)

    Returns:
        The saved record with 'id', 'meta' and 'data' keys

    Raises:
        ValidationError: If the entry is invalid
    """
    entry = validate_record(record_type, data)
    entry_data = entry.model_dump(mode="json")

    added_at = datetime.now().isoformat()
    meta = {
        "type": record_type,
        "year": str(entry.year),
        "added_at": added_at,
    }
    record_id = _generate_record_id(record_type, entry_data, added_at)

    record = {"meta": meta, "data": entry_data}
    record_path = _write_record(record_id, record)

    logger.debug(f"Saved {record_type} {record_id} ({entry.amount:.2f}) to {record_path}")
    return {"id": record_id, **record}


def _write_record(record_id: str, record: Dict[str, Any]) -> Path:
    """Write a record into the directory for its meta year and type."""
    meta = record["meta"]
    target_dir = get_records_dir() / meta["year"] / _TYPE_DIRS[meta["type"]]
    target_dir.mkdir(parents=True, exist_ok=True)

    record_path = target_dir / f"{record_id}.json"
    with open(record_path, "w") as f:
        json.dump(record, f, indent=2)
    return record_path


def add_income(**fields) -> Dict[str, Any]:
    """Add an income entry. See IncomeRecord for fields."""
    return add_record("income", fields)


def add_expense(**fields) -> Dict[str, Any]:
    """Add an expense entry. See ExpenseRecord for fields."""
    return add_record("expense", fields)


def _read_record_file(json_file: Path) -> Optional[Dict[str, Any]]:
    try:
        with open(json_file) as f:
            record = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.warning(f"Skipping unreadable record {json_file.name}: {e}")
        return None

    record["id"] = json_file.stem
    return record


def _matches(
    record: Dict[str, Any],
    category: Optional[str],
    deductible: Optional[bool],
    start_date: Optional[str],
    end_date: Optional[str],
    search: Optional[str],
) -> bool:
    data = record.get("data") or {}
    entry_date = str(data.get("date", ""))

    if category and data.get("category") != category:
        return False
    if deductible is not None:
        if (record.get("meta") or {}).get("type") != "expense":
            return False
        if bool(data.get("is_deductible", True)) != deductible:
            return False
    if start_date and entry_date < start_date:
        return False
    if end_date and entry_date > end_date:
        return False
    if search:
        needle = search.lower()
        haystack = [data.get(k) or "" for k in ("description", "source", "vendor")]
        if not any(needle in str(text).lower() for text in haystack):
            return False
    return True


def list_records(
    year: Optional[Union[int, str]] = None,
    record_type: Optional[RecordType] = None,
    category: Optional[str] = None,
    deductible: Optional[bool] = None,
    start_date: Optional[Union[str, Date]] = None,
    end_date: Optional[Union[str, Date]] = None,
    search: Optional[str] = None,
    sort_by: str = "date",
    descending: bool = False,
) -> List[Dict[str, Any]]:
    """List records with optional filters.

    Args:
        year: Filter by year (e.g., 2024)
        record_type: Filter by type ("income" or "expense")
        category: Filter by category (e.g., "software")
        deductible: Only expenses with this is_deductible flag
        start_date: Earliest entry date, inclusive
        end_date: Latest entry date, inclusive
        search: Case-insensitive text in description, source or vendor
        sort_by: "date", "amount" or "description"; ties break on ID
        descending: Reverse the sort order

    Returns:
        List of records, each with 'id', 'meta' and 'data' keys
    """
    if sort_by not in SORT_FIELDS:
        raise ValueError(f"sort_by must be one of {SORT_FIELDS}, got: {sort_by}")
    start_date = str(start_date) if start_date else None
    end_date = str(end_date) if end_date else None

    records_dir = get_records_dir()

    if year is not None:
        year_dirs = [records_dir / str(year)]
    else:
        year_dirs = [p for p in records_dir.iterdir() if p.is_dir() and p.name.isdigit()]

    types = [record_type] if record_type else list(_TYPE_DIRS)

    results = []
    for year_dir in year_dirs:
        for rec_type in types:
            scan_dir = year_dir / _TYPE_DIRS[rec_type]
            if not scan_dir.exists():
                continue
            for json_file in scan_dir.glob("*.json"):
                record = _read_record_file(json_file)
                if record is not None and _matches(record, category, deductible, start_date, end_date, search):
                    results.append(record)

    def sort_key(record):
        value = (record.get("data") or {}).get(sort_by)
        if sort_by == "amount":
            return (float(value or 0), record["id"])
        return (str(value or "").lower(), record["id"])

    results.sort(key=sort_key, reverse=descending)
    return results


def load_entries(year: Union[int, str], record_type: RecordType) -> List[Entry]:
    """Load a year's entries of one type as validated models.

    Entries that no longer validate (e.g. hand-edited files) are skipped
    with a warning.
    """
    entries = []
    for record in list_records(year=year, record_type=record_type):
        try:
            entries.append(validate_record(record_type, record.get("data") or {}))
        except ValidationError as e:
            logger.warning(f"Skipping invalid {record_type} record {record['id']}: {e}")
    return entries


def _find_record_file(record_id: str) -> Optional[Path]:
    """Locate a record file. IDs that are not 8 hex chars never match."""
    if not isinstance(record_id, str) or not _RECORD_ID_RE.match(record_id):
        return None
    for json_file in get_records_dir().rglob(f"{record_id}.json"):
        return json_file
    return None


def get_record(record_id: str) -> Optional[Dict[str, Any]]:
    """Get a single record by ID.

    Returns:
        Record dict if found, None otherwise
    """
    json_file = _find_record_file(record_id)
    if json_file is None:
        return None
    return _read_record_file(json_file)


def update_record(record_id: str, **fields) -> Optional[Dict[str, Any]]:
    """Change fields of an existing record.

    The merged entry is validated again. When the date moves the entry to
    another year, the file moves to that year's directory. The ID and
    added_at are kept.

    Returns:
        The updated record, or None if no record has this ID

    Raises:
        ValidationError: If the updated entry is invalid
    """
    json_file = _find_record_file(record_id)
    if json_file is None:
        return None
    record = _read_record_file(json_file)
    if record is None:
        return None

    meta = dict(record.get("meta") or {})
    record_type = meta.get("type")
    entry = validate_record(record_type, {**(record.get("data") or {}), **fields})

    meta["year"] = str(entry.year)
    meta["updated_at"] = datetime.now().isoformat()
    updated = {"meta": meta, "data": entry.model_dump(mode="json")}

    record_path = _write_record(record_id, updated)
    if record_path != json_file:
        json_file.unlink()
        logger.debug(f"Moved {record_type} {record_id} to {record_path}")

    logger.debug(f"Updated {record_type} {record_id}: {sorted(fields)}")
    return {"id": record_id, **updated}


def remove_record(record_id: str) -> bool:
    """Delete a record by its ID.

    Returns:
        True if record was found and deleted, False if not found
    """
    json_file = _find_record_file(record_id)
    if json_file is None:
        return False
    json_file.unlink()
    logger.debug(f"Removed record {record_id}")
    return True


# =============================================================================
# TOTALS
# =============================================================================

def totals_from_entries(
    year: Union[int, str],
    incomes: List[IncomeRecord],
    expenses: List[ExpenseRecord],
) -> YearTotals:
    """Sum entries into YearTotals.

    Only entries dated in `year` are counted. Taxable income goes to
    total_income; income marked non-taxable goes to non_taxable_income.
    """
    year = int(year)
    incomes = [e for e in incomes if e.year == year]
    expenses = [e for e in expenses if e.year == year]

    return YearTotals(
        year=year,
        total_income=sum(e.amount for e in incomes if e.taxable),
        non_taxable_income=sum(e.amount for e in incomes if not e.taxable),
        total_expenses=sum(e.amount for e in expenses),
        deductible_expenses=sum(e.amount for e in expenses if e.is_deductible),
        income_entries=len(incomes),
        expense_entries=len(expenses),
    )


def year_totals(year: Union[int, str]) -> YearTotals:
    """Totals of the stored income and expense entries for a year."""
    totals = totals_from_entries(
        year,
        load_entries(year, "income"),
        load_entries(year, "expense"),
    )
    logger.debug(
        f"totals {year}: income={totals.total_income:.2f} "
        f"expenses={totals.total_expenses:.2f} deductible={totals.deductible_expenses:.2f}"
    )
    return totals
