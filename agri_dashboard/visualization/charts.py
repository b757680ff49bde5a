"""
Chart rendering for tabular metric datasets
Bar, line, area and pie charts rendered off-screen to PNG
"""

import io
import logging
from typing import List, Optional, Sequence

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from ..models import AdminRecord
from .choropleth import parse_numeric_value
from .formatting import format_parameter_name

logger = logging.getLogger(__name__)

CHART_TYPES = ("bar", "line", "area", "pie")
SERIES_COLORS = ["#8884d8", "#82ca9d", "#ffc658", "#ff7300", "#8dd1e1", "#d084d0", "#ffb347"]
MAX_PIE_SLICES = 10

def _category(record: AdminRecord, x_field: str) -> str:
    value = record.metric(x_field)
    return str(value or record.adm1_en or record.adm2_en or record.adm3_en or "")

def _series(records: Sequence[AdminRecord], y_field: str) -> List[float]:
    # Missing or unparseable values plot as zero
    return [parse_numeric_value(record.metric(y_field)) or 0 for record in records]

def render_chart(records: Sequence[AdminRecord], chart_type: str, x_field: str,
                 y_fields: Sequence[str], title: Optional[str] = None) -> bytes:
    """Render records as a PNG chart"""

    if chart_type not in CHART_TYPES:
        raise ValueError(f"Unsupported chart type: {chart_type}")

    fig, ax = plt.subplots(figsize=(10, 6), dpi=100)
    try:
        categories = [_category(r, x_field) for r in records]

        if not records or not y_fields:
            ax.text(0.5, 0.5, "No data available", ha="center", va="center", transform=ax.transAxes)
            ax.set_axis_off()
        elif chart_type == "pie":
            y_field = y_fields[0]
            values = [max(0, v) for v in _series(records, y_field)[:MAX_PIE_SLICES]]
            labels = categories[:MAX_PIE_SLICES]
            if sum(values) > 0:
                ax.pie(values, labels=labels, autopct="%1.0f%%", colors=SERIES_COLORS)
            else:
                ax.text(0.5, 0.5, "No positive values", ha="center", va="center", transform=ax.transAxes)
            ax.set_title(format_parameter_name(y_field))
        else:
            positions = range(len(categories))
            width = 0.8 / len(y_fields)
            for i, y_field in enumerate(y_fields):
                values = _series(records, y_field)
                color = SERIES_COLORS[i % len(SERIES_COLORS)]
                label = format_parameter_name(y_field)
                if chart_type == "bar":
                    ax.bar([p + i * width for p in positions], values, width=width, color=color, label=label)
                elif chart_type == "line":
                    ax.plot(list(positions), values, color=color, marker="o", label=label)
                else:
                    ax.fill_between(list(positions), values, color=color, alpha=0.4, label=label)
                    ax.plot(list(positions), values, color=color)
            ax.set_xticks(list(positions))
            ax.set_xticklabels(categories, rotation=45, ha="right")
            ax.legend()
            ax.grid(axis="y", alpha=0.3)

        if title:
            fig.suptitle(title)
        fig.tight_layout()

        buffer = io.BytesIO()
        fig.savefig(buffer, format="png")
        logger.debug(f"Rendered {chart_type} chart with {len(records)} rows")
        return buffer.getvalue()
    finally:
        plt.close(fig)
