"""Refresh coordination: owns the working set and pushes recomputed rows to the grid and plot.

Flow:
  load()            dataset -> normalize -> working set -> grid.set_data + plot.render
  request_refresh() debounced: each call cancels the pending timer and schedules a new one
  refresh()         parse inputs -> compute_derived -> working set -> grid.replace_data + plot.render

All calls happen on one event loop, so the working set needs no locking.
"""

import asyncio
import dataclasses
import logging
from collections.abc import Callable
from typing import Any, Protocol

from eyepieceguide.compute import compute_derived
from eyepieceguide.dataset import DatasetLoadError
from eyepieceguide.models import (
    EyepieceRecord,
    PlotSpec,
    RawRecord,
    TelescopeParams,
    WorkingSet,
)
from eyepieceguide.normalize import normalize_records
from eyepieceguide.renderers.table import COLUMN_TITLES

logger = logging.getLogger(__name__)

Rows = list[dict[str, Any]]

_RECORD_FIELDS = frozenset(f.name for f in dataclasses.fields(EyepieceRecord))


class Grid(Protocol):
    def set_data(self, rows: Rows) -> None: ...

    def replace_data(self, rows: Rows) -> None: ...


class Plot(Protocol):
    def render(self, rows: Rows, spec: PlotSpec) -> None: ...


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(
        self, delay: float, callback: Callable[..., Any], *args: Any
    ) -> TimerHandle: ...


class RefreshCoordinator:
    """Single writer of the eyepiece working set.

    The grid and plot only ever receive a fresh list of row dicts; they never
    see the records themselves.
    """

    def __init__(
        self,
        grid: Grid,
        plot: Plot,
        scheduler: Scheduler | None = None,
        debounce_seconds: float = 0.3,
    ) -> None:
        self.grid = grid
        self.plot = plot
        self.debounce_seconds = debounce_seconds
        self.state = WorkingSet()
        self.plot_spec = PlotSpec()
        self._scheduler = scheduler
        self._pending: TimerHandle | None = None
        self._loader: Callable[[], list[RawRecord]] | None = None

    # ---------------------------------------------------------
    # Initial load
    # ---------------------------------------------------------
    def load(self, loader: Callable[[], list[RawRecord]]) -> bool:
        """Fetch and normalize the dataset, then render grid and plot once.

        On DatasetLoadError the working set is marked failed and nothing is rendered.

        Returns:
            True when the working set is ready.
        """
        self._loader = loader
        try:
            raw = loader()
        except DatasetLoadError as e:
            logger.warning("Dataset load failed: %s", e)
            self.state.status = "failed"
            self.state.error = str(e)
            return False

        self.state.records = normalize_records(raw)
        self.state.status = "ready"
        self.state.error = None
        rows = self.state.rows()
        self.grid.set_data(rows)
        self.plot.render(rows, self.plot_spec)
        return True

    def retry_load(self) -> bool:
        """Repeat the last load() call."""
        if self._loader is None:
            raise RuntimeError("retry_load() called before load()")
        self.state.status = "pending"
        return self.load(self._loader)

    # ---------------------------------------------------------
    # Recompute
    # ---------------------------------------------------------
    def refresh(self, focal_length_text: str, focal_ratio_text: str) -> None:
        """Recompute derived fields for the current telescope inputs and re-render."""
        if not self.state.is_ready:
            logger.debug("Refresh skipped, working set is %s", self.state.status)
            return

        params = TelescopeParams.from_text(focal_length_text, focal_ratio_text)
        self.state.records = compute_derived(self.state.records, params)
        self.state.params = params
        rows = self.state.rows()
        self.grid.replace_data(rows)
        self.plot.render(rows, self.plot_spec)

    def request_refresh(self, focal_length_text: str, focal_ratio_text: str) -> None:
        """Debounced refresh(). Supersedes any refresh still waiting for its quiet period.

        Without an injected scheduler the running asyncio loop is used; when
        called from synchronous code with no loop, the refresh runs immediately.
        """
        self.cancel_pending()
        scheduler = self._scheduler
        if scheduler is None:
            try:
                scheduler = asyncio.get_running_loop()
            except RuntimeError:
                logger.debug("No running event loop, refreshing immediately")
                self.refresh(focal_length_text, focal_ratio_text)
                return
        self._pending = scheduler.call_later(
            self.debounce_seconds, self._fire, focal_length_text, focal_ratio_text
        )

    def _fire(self, focal_length_text: str, focal_ratio_text: str) -> None:
        self._pending = None
        self.refresh(focal_length_text, focal_ratio_text)

    def cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    # ---------------------------------------------------------
    # Plot selection
    # ---------------------------------------------------------
    def select_plot_fields(self, x_key: str, y_key: str, **bounds: Any) -> None:
        """Switch the plotted field pair and re-render the plot.

        Keyword arguments override PlotSpec fields (labels, axis bounds).
        """
        for key in (x_key, y_key):
            if key not in _RECORD_FIELDS:
                raise ValueError(f"Unknown eyepiece field: {key}")
        options: dict[str, Any] = {
            "x_label": COLUMN_TITLES.get(x_key),
            "y_label": COLUMN_TITLES.get(y_key),
            "x_min": None,
            "y_min": None,
        }
        options.update(bounds)
        self.plot_spec = PlotSpec(x_key=x_key, y_key=y_key, **options)
        if self.state.is_ready:
            self.plot.render(self.state.rows(), self.plot_spec)
