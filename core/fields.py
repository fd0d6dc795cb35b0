from __future__ import annotations

from typing import Dict, Tuple

# Canonical column order of the contacts CSV (us-500 layout).
FIELDS: Tuple[str, ...] = (
    "first_name",
    "last_name",
    "company_name",
    "address",
    "city",
    "county",
    "state",
    "zip",
    "phone1",
    "phone2",
    "email",
    "web",
)

SUMMARY_FIELDS: Tuple[str, ...] = ("state", "zip", "county", "city")
PERSON_FIELDS: Tuple[str, ...] = ("first_name", "last_name")
COMPANY_FIELD = "company_name"

UNKNOWN_BUCKET = "Unknown"
SENTINEL = "-"


def field_label(field: str) -> str:
    """`company_name` -> `company name` for selects and table headers."""
    return field.replace("_", " ")


def field_labels() -> Dict[str, str]:
    return {f: field_label(f) for f in FIELDS}


def require_field(field: str) -> str:
    if field not in FIELDS:
        raise ValueError(f"Unknown contact field: {field!r}")
    return field
