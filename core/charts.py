from __future__ import annotations

from typing import Any, Dict

import altair as alt

alt.data_transformers.disable_max_rows()

# Slate palette of the dashboard cards.
DARK_BACKGROUND = "#1e293b"
DARK_TEXT = "#cbd5e1"
DARK_GRID = "#334155"


def to_vega_spec(chart: alt.Chart, *, dark: bool = True) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    if dark:
        chart = (
            chart.configure(background=DARK_BACKGROUND)
            .configure_axis(labelColor=DARK_TEXT, titleColor=DARK_TEXT, gridColor=DARK_GRID, domainColor=DARK_GRID)
            .configure_legend(labelColor=DARK_TEXT, titleColor=DARK_TEXT)
            .configure_view(strokeWidth=0)
        )
    return chart.to_dict()
