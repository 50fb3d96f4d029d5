# Headless defaults for the plotting adapters: the Agg canvas never needs a
# display, and Qt (if something does create a Qt canvas) uses the offscreen
# platform plugin.

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("MPLBACKEND", "Agg")


@pytest.fixture
def agg_backend():
    from matplotlib.backends.backend_agg import FigureCanvasAgg

    from chartkit.charting.backends import MatplotlibChartBackend

    return MatplotlibChartBackend(canvas_class=FigureCanvasAgg)


@pytest.fixture
def registry(agg_backend):
    from chartkit.charting.registry import ChartRegistry

    return ChartRegistry(backend=agg_backend)


@pytest.fixture
def default_settings():
    from chartkit.services.settings_service import ChartSettings

    previous = ChartSettings.instance
    ChartSettings.instance = ChartSettings(
        bar_emphasis_width=1.4,
        bar_emphasis_height=1.1,
        pie_emphasis_scale=1.1,
        pie_snap_final_slice=True,
        label_format="%.01f",
    )
    yield ChartSettings.instance
    ChartSettings.instance = previous
