"""Field normalization: scraped eyepiece table rows to the canonical EyepieceRecord schema.

The upstream dataset is Ernest's list of eyepiece measurements (astro-talks.ru),
scraped into JSON with the spreadsheet's column headers as keys. Headers are
inconsistent (trailing spaces, punctuation, a leading "1 "), so the mapping is
an explicit table rather than a name transformation.
"""

import math
from collections.abc import Iterable
from typing import Any

from eyepieceguide.models import EyepieceRecord, RawRecord

# Source column header -> (EyepieceRecord field, kind)
FIELD_MAP: dict[str, tuple[str, str]] = {
    "1 Brand": ("brand", "text"),
    "Model": ("model", "text"),
    "MFR": ("manufacturer", "text"),
    "Category": ("category", "text"),
    "FL": ("focal_length_nominal", "numeric"),
    "Diam.": ("diameter", "numeric"),
    "AFOV": ("afov", "numeric"),
    "Wt.": ("weight", "numeric"),
    "Eye Relief": ("eye_relief", "numeric"),
    "Mfr's Field Stop ": ("field_stop_nominal", "numeric"),
    "Calc.FieldStop": ("field_stop_calculated", "numeric"),
    "Undercuts?": ("undercuts", "category"),
    "Coatings": ("coatings", "category"),
    "Edge black": ("blackened_edge", "category"),
    "Elem.": ("n_elements", "numeric"),
}

NUMERIC_FIELDS: tuple[str, ...] = tuple(
    dest for dest, kind in FIELD_MAP.values() if kind == "numeric"
)


def _to_float(value: Any) -> float:
    """Parse a numeric cell. Integers beyond float range become ±inf, non-numbers NaN."""
    if isinstance(value, bool):
        return float("nan")
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, float):
        return value
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return float("nan")
    return float("nan")


def normalize_record(raw: RawRecord) -> EyepieceRecord:
    """Map one raw row onto EyepieceRecord.

    Unknown keys are dropped. Missing keys and JSON nulls become None;
    numeric columns that are present but unparseable become NaN.
    Derived fields keep their NaN defaults.
    """
    values: dict[str, Any] = {}
    for source_key, (dest, kind) in FIELD_MAP.items():
        value = raw.get(source_key)
        if value is None:
            values[dest] = None
        elif kind == "numeric":
            values[dest] = _to_float(value)
        else:
            values[dest] = value
    return EyepieceRecord(**values)


def normalize_records(raw_records: Iterable[RawRecord]) -> tuple[EyepieceRecord, ...]:
    """Normalize every raw row, one-to-one and in order."""
    return tuple(normalize_record(raw) for raw in raw_records)
