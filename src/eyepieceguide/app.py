"""Eyepiece Guide: Streamlit page listing eyepieces with telescope-dependent optics."""

from functools import partial

import streamlit as st
from dotenv import load_dotenv

load_dotenv()

from eyepieceguide.config import configure_logging, load_settings  # noqa: E402
from eyepieceguide.dataset import load_dataset  # noqa: E402
from eyepieceguide.refresh import RefreshCoordinator  # noqa: E402
from eyepieceguide.renderers.plotly_scatter import FigurePlot  # noqa: E402
from eyepieceguide.renderers.table import (  # noqa: E402
    COLUMN_TITLES,
    PLOTTABLE_FIELDS,
    FrameGrid,
)

settings = load_settings()
configure_logging(settings.log_level)

st.set_page_config(
    page_title="Eyepiece Guide",
    page_icon="🔭",
    layout="wide",
)

# --- Session state initialization ---
# The coordinator lives in session_state so the working set survives reruns.
if "coordinator" not in st.session_state:
    _coordinator = RefreshCoordinator(
        grid=FrameGrid(),
        plot=FigurePlot(),
    )
    _coordinator.load(
        partial(load_dataset, settings.dataset, timeout=settings.http_timeout)
    )
    st.session_state.coordinator = _coordinator

coordinator: RefreshCoordinator = st.session_state.coordinator

st.title("Eyepiece Buyer's Guide")
st.caption(
    "Eyepiece data from Ernest's list (astro-talks.ru). Enter your telescope to "
    "see the magnification, exit pupil, and true field of view of each eyepiece."
)

# --- Load failure ---
if coordinator.state.status == "failed":
    st.error(f"Could not load the eyepiece dataset: {coordinator.state.error}")
    if st.button("Retry", key="retry_load"):
        coordinator.retry_load()
        st.rerun()
    st.stop()


def _on_telescope_change() -> None:
    # text_input only commits on Enter or blur; there is no event loop here, so this runs at once.
    coordinator.request_refresh(
        st.session_state.telescope_focal_length,
        st.session_state.telescope_focal_ratio,
    )


def _on_plot_fields_change() -> None:
    coordinator.select_plot_fields(st.session_state.plot_x, st.session_state.plot_y)


# --- Telescope inputs ---
col1, col2 = st.columns(2)
with col1:
    st.text_input(
        "Telescope focal length [mm]",
        key="telescope_focal_length",
        placeholder="e.g. 1000",
        on_change=_on_telescope_change,
    )
with col2:
    st.text_input(
        "Telescope focal ratio",
        key="telescope_focal_ratio",
        placeholder="e.g. 5",
        on_change=_on_telescope_change,
    )

# --- Scatter plot ---
xcol, ycol = st.columns(2)
with xcol:
    st.selectbox(
        "X axis",
        PLOTTABLE_FIELDS,
        index=PLOTTABLE_FIELDS.index(coordinator.plot_spec.x_key),
        format_func=lambda f: COLUMN_TITLES.get(f, f),
        key="plot_x",
        on_change=_on_plot_fields_change,
    )
with ycol:
    st.selectbox(
        "Y axis",
        PLOTTABLE_FIELDS,
        index=PLOTTABLE_FIELDS.index(coordinator.plot_spec.y_key),
        format_func=lambda f: COLUMN_TITLES.get(f, f),
        key="plot_y",
        on_change=_on_plot_fields_change,
    )

if coordinator.plot.figure is not None:
    st.plotly_chart(coordinator.plot.figure, width="stretch")

# --- Data grid ---
st.dataframe(coordinator.grid.frame, width="stretch", hide_index=True)
