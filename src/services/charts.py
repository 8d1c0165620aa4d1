"""Chart series payloads consumed by Chart.js on the detail page"""
from typing import Dict, Optional, Sequence

from src.models import ChartPoint
from src.services.formatting import format_currency, format_date

# Only the most recent 30 daily points are charted
CHART_WINDOW = 30


def tooltip_label(label: str, value: Optional[float]) -> str:
    """Tooltip text: '<label>: <currency>' (label part omitted when empty)"""
    text = f"{label}: " if label else ''
    if value is not None:
        text += format_currency(value)
    return text


def build_chart_data(metric: str, points: Sequence[ChartPoint], label: str) -> Dict:
    """
    Build the JSON series for one chart tab from the last CHART_WINDOW points.

    Args:
        metric: Tab key the series belongs to
        points: Chart points in chronological order
        label: Dataset label shown in tooltips

    Returns:
        Dict with 'metric', 'label' and 'points' ({label, value, tooltip});
        'points' is empty when there is nothing to plot
    """
    recent = list(points)[-CHART_WINDOW:]
    return {
        'metric': metric,
        'label': label,
        'points': [
            {
                'label': format_date(p.date),
                'value': p.value,
                'tooltip': tooltip_label(label, p.value),
            }
            for p in recent
        ],
    }
