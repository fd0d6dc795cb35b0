from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List

import pandas as pd

from core.charts import doughnut_chart, get_color, to_vega_spec
from core.fields import UNKNOWN_BUCKET, field_label, require_field
from core.filters import ContactFilters


def summarize_by(contacts: pd.DataFrame, field: str) -> Dict[str, int]:
    """Count contacts per value of `field`, buckets in first-seen order.

    Blank values are counted under "Unknown".
    """
    require_field(field)
    if contacts.empty:
        return {}
    keys = contacts[field].fillna("").astype(str)
    keys = keys.where(keys != "", UNKNOWN_BUCKET)
    counts = keys.groupby(keys, sort=False).size()
    return {str(label): int(count) for label, count in counts.items()}


def summary_badges(summary: Dict[str, int]) -> List[Dict[str, Any]]:
    total = sum(summary.values())
    badges: List[Dict[str, Any]] = []
    for i, (label, count) in enumerate(summary.items()):
        percent = round(count / total * 100, 1) if total else 0.0
        badges.append({"label": label, "count": count, "percent": percent, "color": get_color(i)})
    return badges


def compute_summary(filters: ContactFilters, ctx: Dict[str, Any]) -> Dict[str, Any]:
    summary: Dict[str, int] = ctx.get("summary") or {}
    if not summary:
        return {"filters": asdict(filters), "field": filters.summary_field, "total": 0, "badges": [], "charts": {}}

    charts: Dict[str, Any] = {
        "doughnut": to_vega_spec(doughnut_chart(summary, title=field_label(filters.summary_field).title())),
    }
    return {
        "filters": asdict(filters),
        "field": filters.summary_field,
        "total": int(sum(summary.values())),
        "badges": summary_badges(summary),
        "charts": charts,
    }
