"""Dataset loading: fetch the eyepiece JSON from a local file or an HTTP URL."""

import json
import logging
from pathlib import Path
from typing import Any

import httpx

from eyepieceguide.models import RawRecord

logger = logging.getLogger(__name__)

_ROOT = Path(__file__).parent.parent.parent
DEFAULT_DATASET = _ROOT / "resources" / "eyepiece_buyers_guide.json"


class DatasetLoadError(Exception):
    """Dataset could not be fetched or is not an array of objects."""


def _is_url(source: str | Path) -> bool:
    return isinstance(source, str) and source.startswith(("http://", "https://"))


def _fetch_text(url: str, timeout: float) -> str:
    try:
        resp = httpx.get(url, timeout=timeout, follow_redirects=True)
        resp.raise_for_status()
    except httpx.HTTPError as exc:
        raise DatasetLoadError(f"Could not fetch {url}: {exc}") from exc
    return resp.text


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DatasetLoadError(f"Could not read {path}: {exc}") from exc


def parse_dataset(text: str) -> list[RawRecord]:
    """Parse dataset JSON. The top level must be an array of objects.

    Raises:
        DatasetLoadError: On invalid JSON or an unexpected shape.
    """
    try:
        payload: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DatasetLoadError(f"Dataset is not valid JSON: {exc}") from exc
    if not isinstance(payload, list):
        raise DatasetLoadError(
            f"Dataset must be a JSON array, got {type(payload).__name__}"
        )
    for i, item in enumerate(payload):
        if not isinstance(item, dict):
            raise DatasetLoadError(
                f"Dataset entry {i} is {type(item).__name__}, expected an object"
            )
    return payload


def load_dataset(
    source: str | Path = DEFAULT_DATASET, timeout: float = 10.0
) -> list[RawRecord]:
    """Load the raw eyepiece rows.

    Args:
        source: Local path or http(s) URL of the JSON resource.
        timeout: HTTP timeout in seconds (URLs only).

    Returns:
        List of raw records, schema owned by the upstream dataset.

    Raises:
        DatasetLoadError: When the resource is missing, unreachable, or malformed.
    """
    if _is_url(source):
        text = _fetch_text(str(source), timeout)
    else:
        text = _read_text(Path(source))
    records = parse_dataset(text)
    logger.info("Loaded %d eyepiece rows from %s", len(records), source)
    return records
