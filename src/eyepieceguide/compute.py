"""Derived optical quantities: magnification, exit pupil, and true field of view per eyepiece."""

import dataclasses
import logging
from collections.abc import Sequence

import numpy as np

from eyepieceguide.models import EyepieceRecord, TelescopeParams

logger = logging.getLogger(__name__)


def _as_float(value: object) -> float:
    if value is None or isinstance(value, bool):
        return np.nan
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError:
            return np.inf if value > 0 else -np.inf
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return np.nan


def _column(records: Sequence[EyepieceRecord], name: str) -> np.ndarray:
    """Float array of one field. None and non-numeric values become NaN."""
    return np.array([_as_float(getattr(r, name)) for r in records], dtype=np.float64)


def compute_derived(
    records: Sequence[EyepieceRecord], params: TelescopeParams
) -> tuple[EyepieceRecord, ...]:
    """Recompute the derived fields of every record for the given telescope.

    magnification = telescope FL / eyepiece FL
    exit pupil    = eyepiece FL / telescope focal ratio
    TFOV          = AFOV / magnification

    Division follows IEEE-754: x/0 gives ±inf, 0/0 and anything involving
    NaN gives NaN. Never raises. The input records are not modified.

    Args:
        records: Canonical records, focal_length_nominal and afov populated or None.
        params: Telescope focal length and focal ratio, NaN when unset.

    Returns:
        New records in the same order with derived fields overwritten.
    """
    if not records:
        return ()

    focal_length = _column(records, "focal_length_nominal")
    afov = _column(records, "afov")
    telescope_fl = np.float64(params.focal_length)
    telescope_fr = np.float64(params.focal_ratio)

    with np.errstate(divide="ignore", invalid="ignore"):
        magnification = telescope_fl / focal_length
        exit_pupil = focal_length / telescope_fr
        tfov = afov / magnification

    logger.debug(
        "Recomputed %d records (FL=%s, f/%s)",
        len(records),
        params.focal_length,
        params.focal_ratio,
    )
    return tuple(
        dataclasses.replace(
            record,
            magnification_nominal=float(magnification[i]),
            exit_pupil_nominal=float(exit_pupil[i]),
            tfov_nominal=float(tfov[i]),
        )
        for i, record in enumerate(records)
    )


def compute_record(record: EyepieceRecord, params: TelescopeParams) -> EyepieceRecord:
    """Single-record form of compute_derived."""
    return compute_derived([record], params)[0]
