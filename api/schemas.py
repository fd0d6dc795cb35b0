from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel

ContactField = Literal[
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
]
SummaryField = Literal["state", "zip", "county", "city"]


class ContactFiltersModel(BaseModel):
    search_field: ContactField = "state"
    query: str = ""
    summary_field: SummaryField = "state"


class MetaFieldsResponse(BaseModel):
    fields: List[str]
    summary_fields: List[str]


class MetaStatusResponse(BaseModel):
    rows: int
    error: str
    using_fallback: bool
