"""Data model definitions: explicit boundaries between load, compute, and render layers."""

from dataclasses import asdict, dataclass, field
from typing import Any

RawRecord = dict[str, Any]  # Scraped column header -> value, schema owned upstream

_NAN = float("nan")


@dataclass(frozen=True)
class EyepieceRecord:
    """A single eyepiece in the canonical schema.

    Non-derived fields are None when the dataset has no value for them.
    Derived fields are always present and stay NaN until computed.
    """

    brand: str | None = None
    model: str | None = None
    manufacturer: str | None = None
    category: str | None = None
    focal_length_nominal: float | None = None  # mm
    diameter: float | None = None  # Barrel diameter (inches)
    afov: float | None = None  # Apparent field of view (degrees)
    weight: float | None = None  # grams
    eye_relief: float | None = None  # mm
    field_stop_nominal: float | None = None  # mm, as published by the manufacturer
    field_stop_calculated: float | None = None  # mm
    undercuts: Any = None
    coatings: Any = None
    blackened_edge: Any = None
    n_elements: float | None = None
    magnification_nominal: float = _NAN
    exit_pupil_nominal: float = _NAN  # mm
    tfov_nominal: float = _NAN  # True field of view (degrees)

    def to_row(self) -> dict[str, Any]:
        """Plain dict of every field, in declaration order, for the display layer."""
        return asdict(self)


@dataclass(frozen=True)
class TelescopeParams:
    """Telescope parameters entered by the user. NaN means unset."""

    focal_length: float = _NAN  # mm
    focal_ratio: float = _NAN  # f-number

    @classmethod
    def from_text(cls, focal_length: str, focal_ratio: str) -> "TelescopeParams":
        """Build params from raw input text. Blank or non-numeric text becomes NaN."""
        return cls(
            focal_length=parse_param(focal_length),
            focal_ratio=parse_param(focal_ratio),
        )


def parse_param(text: str | None) -> float:
    """Parse a telescope parameter input field.

    Blank and malformed input are both treated as unset (NaN).
    """
    if text is None or not text.strip():
        return _NAN
    try:
        return float(text)
    except ValueError:
        return _NAN


@dataclass(frozen=True)
class PlotSpec:
    """Which two fields the scatter plot shows, and its axis bounds (None = automatic)."""

    x_key: str = "focal_length_nominal"
    y_key: str = "afov"
    x_label: str | None = "Focal Length [mm]"
    y_label: str | None = "AFOV [°]"
    x_min: float | None = 0
    x_max: float | None = None
    y_min: float | None = 0
    y_max: float | None = None


@dataclass
class WorkingSet:
    """The current eyepiece collection. Written only by the RefreshCoordinator."""

    records: tuple[EyepieceRecord, ...] = ()
    status: str = "pending"  # "pending" | "ready" | "failed"
    error: str | None = None
    params: TelescopeParams = field(default_factory=TelescopeParams)

    @property
    def is_ready(self) -> bool:
        return self.status == "ready"

    def rows(self) -> list[dict[str, Any]]:
        """Transient read copy handed to the display collaborators."""
        return [r.to_row() for r in self.records]
