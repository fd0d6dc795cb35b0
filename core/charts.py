from __future__ import annotations

from typing import Any, Dict, List

import altair as alt
import pandas as pd

alt.data_transformers.disable_max_rows()

PALETTE = ["#4e73df", "#e74a3b", "#f6c23e", "#1cc88a", "#36b9cc", "#ff9f40"]


def get_color(index: int) -> str:
    return PALETTE[index % len(PALETTE)]


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def doughnut_chart(summary: Dict[str, int], title: str = "Count") -> alt.Chart:
    """Doughnut of bucket counts, segments in the summary's insertion order."""
    labels: List[str] = list(summary.keys())
    df = pd.DataFrame(
        {
            "label": labels,
            "count": [summary[k] for k in labels],
            "order": list(range(len(labels))),
        }
    )
    return (
        alt.Chart(df)
        .mark_arc(innerRadius=50, outerRadius=100)
        .encode(
            theta=alt.Theta("count:Q", stack=True),
            order=alt.Order("order:Q"),
            color=alt.Color(
                "label:N",
                title=title,
                sort=labels,
                scale=alt.Scale(domain=labels, range=[get_color(i) for i in range(len(labels))]),
            ),
            tooltip=[
                alt.Tooltip("label:N", title=title),
                alt.Tooltip("count:Q", title="Contacts", format=",d"),
            ],
        )
        .properties(width=220, height=220)
    )
