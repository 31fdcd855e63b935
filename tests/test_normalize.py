"""Tests for raw row -> EyepieceRecord normalization."""

from __future__ import annotations

import dataclasses
import json
import math

from eyepieceguide.models import EyepieceRecord
from eyepieceguide.normalize import (
    FIELD_MAP,
    NUMERIC_FIELDS,
    normalize_record,
    normalize_records,
)

NAGLER = {
    "1 Brand": "Tele Vue",
    "Model": "Nagler T6",
    "MFR": "Tele Vue",
    "Category": "Ultra-wide",
    "FL": 13,
    "Diam.": 1.25,
    "AFOV": 82,
    "Wt.": 227,
    "Eye Relief": 12,
    "Mfr's Field Stop ": 17.6,
    "Calc.FieldStop": 18.6,
    "Undercuts?": "No",
    "Coatings": "FMC",
    "Edge black": "Yes",
    "Elem.": 6,
}


class TestNormalizeRecord:
    def test_full_row(self) -> None:
        rec = normalize_record(NAGLER)
        assert rec.brand == "Tele Vue"
        assert rec.model == "Nagler T6"
        assert rec.manufacturer == "Tele Vue"
        assert rec.category == "Ultra-wide"
        assert rec.focal_length_nominal == 13.0
        assert rec.diameter == 1.25
        assert rec.afov == 82.0
        assert rec.weight == 227.0
        assert rec.eye_relief == 12.0
        assert rec.field_stop_nominal == 17.6
        assert rec.field_stop_calculated == 18.6
        assert rec.undercuts == "No"
        assert rec.coatings == "FMC"
        assert rec.blackened_edge == "Yes"
        assert rec.n_elements == 6.0

    def test_derived_fields_start_nan(self) -> None:
        rec = normalize_record(NAGLER)
        assert math.isnan(rec.magnification_nominal)
        assert math.isnan(rec.exit_pupil_nominal)
        assert math.isnan(rec.tfov_nominal)

    def test_numeric_strings_are_parsed(self) -> None:
        rec = normalize_record({"FL": "10", "AFOV": " 68 "})
        assert rec.focal_length_nominal == 10.0
        assert rec.afov == 68.0

    def test_unparseable_numeric_becomes_nan(self) -> None:
        rec = normalize_record({"FL": "7-21", "AFOV": "", "Elem.": True})
        assert math.isnan(rec.focal_length_nominal)
        assert math.isnan(rec.afov)
        assert math.isnan(rec.n_elements)

    def test_huge_integer_becomes_infinity(self) -> None:
        rows = json.loads('[{"FL": 1' + "0" * 400 + ', "Wt.": -1' + "0" * 400 + "}]")
        rec = normalize_records(rows)[0]
        assert rec.focal_length_nominal == math.inf
        assert rec.weight == -math.inf

    def test_missing_and_null_fields_are_none(self) -> None:
        rec = normalize_record({"1 Brand": "Baader", "Mfr's Field Stop ": None})
        assert rec.brand == "Baader"
        assert rec.field_stop_nominal is None
        assert rec.focal_length_nominal is None
        assert rec.model is None
        assert rec.coatings is None

    def test_text_fields_not_coerced(self) -> None:
        rec = normalize_record({"Model": 68, "Undercuts?": 1})
        assert rec.model == 68
        assert rec.undercuts == 1

    def test_unknown_keys_dropped(self) -> None:
        rec = normalize_record({**NAGLER, "Notes": "ships with adapter"})
        assert "Notes" not in rec.to_row()
        assert rec == normalize_record(NAGLER)

    def test_trailing_space_header_is_distinct(self) -> None:
        rec = normalize_record({"Mfr's Field Stop": 17.6})
        assert rec.field_stop_nominal is None

    def test_every_record_has_same_field_set(self) -> None:
        rows = [normalize_record(NAGLER).to_row(), normalize_record({}).to_row()]
        assert rows[0].keys() == rows[1].keys()
        assert list(rows[0]) == [f.name for f in dataclasses.fields(EyepieceRecord)]


class TestNormalizeRecords:
    def test_preserves_length_and_order(self) -> None:
        raw = [{"Model": f"m{i}", "FL": i} for i in range(25)]
        out = normalize_records(raw)
        assert len(out) == len(raw)
        assert [r.model for r in out] == [f"m{i}" for i in range(25)]

    def test_empty(self) -> None:
        assert normalize_records([]) == ()

    def test_accepts_generator(self) -> None:
        out = normalize_records({"FL": n} for n in (5, 10))
        assert [r.focal_length_nominal for r in out] == [5.0, 10.0]


def test_field_map_covers_every_non_derived_field() -> None:
    derived = {"magnification_nominal", "exit_pupil_nominal", "tfov_nominal"}
    record_fields = {f.name for f in dataclasses.fields(EyepieceRecord)} - derived
    assert {dest for dest, _ in FIELD_MAP.values()} == record_fields
    assert "focal_length_nominal" in NUMERIC_FIELDS
    assert "brand" not in NUMERIC_FIELDS
