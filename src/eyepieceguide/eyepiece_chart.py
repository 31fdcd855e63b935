"""CLI entry point for a static eyepiece scatter plot.

Edit the telescope/field variables at the top, then run:
    uv run python src/eyepieceguide/eyepiece_chart.py
"""

import matplotlib
from dotenv import load_dotenv

matplotlib.use("Agg")
load_dotenv()

from eyepieceguide.compute import compute_derived  # noqa: E402
from eyepieceguide.config import configure_logging, load_settings  # noqa: E402
from eyepieceguide.dataset import load_dataset  # noqa: E402
from eyepieceguide.models import PlotSpec, TelescopeParams  # noqa: E402
from eyepieceguide.normalize import normalize_records  # noqa: E402
from eyepieceguide.renderers.static import save_static_plot  # noqa: E402

telescope = TelescopeParams(focal_length=1000, focal_ratio=5)
spec = PlotSpec(x_key="focal_length_nominal", y_key="tfov_nominal", y_label="TFOV [°]")

settings = load_settings()
configure_logging(settings.log_level)

raw = load_dataset(settings.dataset, timeout=settings.http_timeout)
records = compute_derived(normalize_records(raw), telescope)
path = save_static_plot(records, spec=spec)
print(f"Saved: {path}")
