from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Optional

import pandas as pd

from core.fields import COMPANY_FIELD, PERSON_FIELDS, SENTINEL
from core.filters import ContactFilters

VIEW_PERSON = "person"
VIEW_COMPANY = "company"
VIEW_TABLE = "table"


def select_detail_view(visible: pd.DataFrame, field: str) -> str:
    if len(visible) != 1:
        return VIEW_TABLE
    if field in PERSON_FIELDS:
        return VIEW_PERSON
    if field == COMPANY_FIELD:
        return VIEW_COMPANY
    return VIEW_TABLE


def format_address(record: Dict[str, str]) -> str:
    return f"{record['address']}, {record['city']}, {record['state']} {record['zip']}"


def preferred_phone(record: Dict[str, str]) -> str:
    return record.get("phone1") or record.get("phone2") or "N/A"


def build_detail(record: Dict[str, str], view: str) -> Optional[Dict[str, str]]:
    """Card content for a single matched contact, or None for the table view."""
    full_name = f"{record['first_name']} {record['last_name']}"
    if view == VIEW_PERSON:
        return {
            "title": full_name,
            "company": record["company_name"],
            "address": format_address(record),
            "phone": preferred_phone(record),
            "email": record["email"],
            "web": record["web"],
        }
    if view == VIEW_COMPANY:
        return {
            "title": record["company_name"],
            "contact": full_name,
            "address": format_address(record),
            "phone": preferred_phone(record),
            "email": record["email"],
        }
    return None


def display_rows(df: pd.DataFrame) -> pd.DataFrame:
    """Table-ready copy with blank cells shown as '-'."""
    out = df.copy()
    return out.replace("", SENTINEL).fillna(SENTINEL)


def compute_contacts(filters: ContactFilters, ctx: Dict[str, Any]) -> Dict[str, Any]:
    contacts: pd.DataFrame = ctx.get("contacts", pd.DataFrame())
    visible: pd.DataFrame = ctx.get("visible", pd.DataFrame())
    view = ctx.get("view") or select_detail_view(visible, filters.search_field)

    detail = None
    if view != VIEW_TABLE:
        detail = build_detail(visible.iloc[0].to_dict(), view)

    rows: List[Dict[str, Any]] = []
    if view == VIEW_TABLE and not visible.empty:
        rows = display_rows(visible).to_dict(orient="records")

    return {
        "filters": asdict(filters),
        "view": view,
        "detail": detail,
        "rows": rows,
        "row_count": int(len(visible)),
        "total_count": int(len(contacts)),
        "status": {"error": ctx.get("error", ""), "using_fallback": bool(ctx.get("using_fallback", False))},
    }
