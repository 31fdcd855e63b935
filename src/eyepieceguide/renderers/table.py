"""Data grid columns and the DataFrame handed to st.dataframe()."""

from collections.abc import Sequence
from typing import Any

import pandas as pd

# (field, display title). Fixed, independent of the loaded data.
COLUMNS: tuple[tuple[str, str], ...] = (
    ("brand", "Brand"),
    ("model", "Model"),
    ("manufacturer", "Manufacturer"),
    ("category", "Category"),
    ("focal_length_nominal", "Nominal FL [mm]"),
    ("diameter", "Barrel Diameter [in]"),
    ("afov", "Nominal AFOV [°]"),
    ("weight", "Weight [g]"),
    ("eye_relief", "Eye Relief [mm]"),
    ("field_stop_nominal", "Field Stop (Nominal) [mm]"),
    ("field_stop_calculated", "Field Stop (Calculated) [mm]"),
    ("undercuts", "Undercuts"),
    ("coatings", "Coatings"),
    ("blackened_edge", "Blackened Edge"),
    ("n_elements", "Number of Elements"),
    ("magnification_nominal", "Magnification (Nominal)"),
    ("exit_pupil_nominal", "Exit Pupil (Nominal) [mm]"),
    ("tfov_nominal", "TFOV (Nominal) [°]"),
)

COLUMN_TITLES: dict[str, str] = dict(COLUMNS)

# Numeric fields offered in the plot axis selectors
PLOTTABLE_FIELDS: tuple[str, ...] = (
    "focal_length_nominal",
    "afov",
    "weight",
    "eye_relief",
    "field_stop_nominal",
    "field_stop_calculated",
    "diameter",
    "n_elements",
    "magnification_nominal",
    "exit_pupil_nominal",
    "tfov_nominal",
)


def records_to_frame(rows: Sequence[dict[str, Any]]) -> pd.DataFrame:
    """Build the grid DataFrame, one row per eyepiece, titled columns in COLUMNS order."""
    fields = [f for f, _ in COLUMNS]
    frame = pd.DataFrame.from_records(list(rows), columns=fields)
    return frame.rename(columns=COLUMN_TITLES)


class FrameGrid:
    """Grid collaborator that keeps the latest DataFrame for st.dataframe()."""

    def __init__(self) -> None:
        self.frame: pd.DataFrame = records_to_frame([])

    def set_data(self, rows: Sequence[dict[str, Any]]) -> None:
        self.frame = records_to_frame(rows)

    def replace_data(self, rows: Sequence[dict[str, Any]]) -> None:
        self.frame = records_to_frame(rows)
