"""Smoke tests for the Streamlit page, run headless with AppTest."""

from __future__ import annotations

from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

_APP = Path(__file__).resolve().parents[1] / "src" / "eyepieceguide" / "app.py"


@pytest.fixture
def app(monkeypatch) -> AppTest:
    monkeypatch.delenv("EYEPIECE_DATASET", raising=False)
    at = AppTest.from_file(str(_APP), default_timeout=30)
    at.run()
    return at


def test_page_renders_chart_and_grid(app) -> None:
    assert not app.exception
    assert len(app.dataframe) == 1
    assert app.get("plotly_chart")


def test_telescope_input_recomputes(app) -> None:
    app.text_input(key="telescope_focal_length").set_value("1000")
    app.text_input(key="telescope_focal_ratio").set_value("5").run()
    assert not app.exception
    coordinator = app.session_state["coordinator"]
    assert coordinator.state.params.focal_length == 1000.0
    assert coordinator.state.params.focal_ratio == 5.0
    assert not coordinator.has_pending
