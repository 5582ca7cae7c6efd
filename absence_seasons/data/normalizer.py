"""
Row normalization for raw attendance CSV rows.

Maps case/spelling variants of the source columns onto canonical
AttendanceRecord fields. Every field degrades to a safe default, so
normalizing a row never raises.
"""

import datetime
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import numpy as np
import pandas as pd

from .schema import AttendanceRecord

logger = logging.getLogger(__name__)

# Ordered key spellings per canonical field; the first key present in a row wins
FIELD_CANDIDATES: Dict[str, Tuple[str, ...]] = {
    'date': ('Date', 'date', 'DATE'),
    'school_id': ('School DBN', 'schoolDBN'),
    'enrolled': ('Enrolled', 'enrolled', 'ENROLLED'),
    'absent': ('Absent', 'absent', 'ABSENT'),
    'present': ('Present', 'present', 'PRESENT'),
}

NUMERIC_FIELDS = ('enrolled', 'absent', 'present')

# Tried in order before falling back to generic parsing
STRICT_DATE_FORMATS = ('%Y-%m-%d', '%Y%m%d')

# Clock-relative words the generic parser would resolve to the run date
RELATIVE_DATE_WORDS = frozenset({'now', 'today', 'tomorrow', 'yesterday'})


def _is_missing(value: Any) -> bool:
    return value is None or (pd.api.types.is_scalar(value) and pd.isna(value))


def lookup_field(raw: Mapping[str, Any], candidates: Iterable[str]) -> Any:
    """
    Return the value of the first candidate key present in the row.

    A key holding None/NaN is treated as absent and the search continues;
    an empty string is a present value. Returns None if nothing matches.
    """
    for key in candidates:
        if key in raw:
            value = raw[key]
            if not _is_missing(value):
                return value
    return None


def parse_date_flexible(value: Any) -> Optional[datetime.date]:
    """
    Parse a date using the fallback chain YYYY-MM-DD, YYYYMMDD, generic.

    Args:
        value: Raw cell value (string, date-like, or missing)

    Returns:
        The calendar date, or None if the value is empty or unparseable
    """
    if _is_missing(value):
        return None
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value

    text = str(value).strip()
    if not text:
        return None

    for fmt in STRICT_DATE_FORMATS:
        try:
            return datetime.datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    if text.lower() in RELATIVE_DATE_WORDS:
        return None
    parsed = pd.to_datetime(text, errors='coerce')
    if pd.isna(parsed):
        return None
    return parsed.date()


def to_number(value: Any) -> float:
    """Coerce a raw value to a finite float; anything else becomes 0."""
    if _is_missing(value):
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value or '_' in value:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if np.isfinite(number) else 0.0


class RowNormalizer:
    """Normalizes raw CSV rows into AttendanceRecord instances"""

    def __init__(self, field_candidates: Optional[Mapping[str, Iterable[str]]] = None):
        """
        Args:
            field_candidates: Optional per-field overrides of the candidate
                key spellings. Fields not overridden keep the defaults.
        """
        unknown = set(field_candidates or {}) - set(FIELD_CANDIDATES)
        if unknown:
            raise ValueError(f"Unknown canonical fields: {sorted(unknown)}")

        self.field_candidates = dict(FIELD_CANDIDATES)
        for field_name, keys in (field_candidates or {}).items():
            self.field_candidates[field_name] = tuple(keys)

    def normalize_row(self, raw: Mapping[str, Any]) -> AttendanceRecord:
        """Map one raw row onto an AttendanceRecord"""
        school_id = lookup_field(raw, self.field_candidates['school_id'])
        values = {
            'school_id': '' if school_id is None else str(school_id),
            'date': parse_date_flexible(lookup_field(raw, self.field_candidates['date'])),
        }
        for field_name in NUMERIC_FIELDS:
            values[field_name] = to_number(lookup_field(raw, self.field_candidates[field_name]))
        return AttendanceRecord(**values)

    def normalize_rows(self, rows: Iterable[Mapping[str, Any]]) -> List[AttendanceRecord]:
        return [self.normalize_row(row) for row in rows]

    def normalize_frame(self, df: pd.DataFrame) -> List[AttendanceRecord]:
        """Normalize every row of a raw DataFrame"""
        if df is None or df.empty:
            return []
        records = self.normalize_rows(df.to_dict('records'))
        logger.debug(f"Normalized {len(records)} rows")
        return records


def valid_records(records: Iterable[AttendanceRecord]) -> List[AttendanceRecord]:
    """Keep only records whose date parsed to a real calendar date"""
    return [record for record in records if record.is_valid]


_default_normalizer = RowNormalizer()


def normalize_row(raw: Mapping[str, Any]) -> AttendanceRecord:
    """Normalize a row using the default field candidates"""
    return _default_normalizer.normalize_row(raw)
