from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from core.fields import FIELDS, SUMMARY_FIELDS, require_field


@dataclass(frozen=True)
class ContactFilters:
    search_field: str = "state"
    query: str = ""
    summary_field: str = "state"


def _as_field(value: object, default: str) -> str:
    if value is None:
        return default
    s = str(value).strip()
    return s if s in FIELDS else default


def normalize_filters(raw: dict) -> ContactFilters:
    search_field = _as_field(raw.get("search_field"), "state")
    summary_field = _as_field(raw.get("summary_field"), "state")
    if summary_field not in SUMMARY_FIELDS:
        summary_field = "state"
    query = raw.get("query") or ""
    if not isinstance(query, str):
        query = str(query)
    return ContactFilters(search_field=search_field, query=query, summary_field=summary_field)


def filter_contacts(contacts: pd.DataFrame, field: str, query: str) -> pd.DataFrame:
    """Rows whose `field` contains `query`, case-insensitively.

    An empty query returns `contacts` unchanged. Matching is plain substring
    containment after case folding; row order is preserved.
    """
    require_field(field)
    if not query:
        return contacts
    if contacts.empty:
        return contacts
    needle = query.casefold()
    mask = contacts[field].astype(str).str.casefold().str.contains(needle, regex=False, na=False)
    return contacts[mask]
