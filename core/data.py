from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from http.client import HTTPException
from typing import Callable, Dict, List, Optional
from urllib.error import HTTPError
from urllib.request import Request, urlopen

import pandas as pd

from core.fields import FIELDS, SENTINEL
from core.filters import ContactFilters, filter_contacts, normalize_filters
from core.metrics_contacts import select_detail_view
from core.metrics_summary import summarize_by


logger = logging.getLogger(__name__)

CSV_URL = "https://raw.githubusercontent.com/jinchen003/Nearabl.Sample.Data/main/us-500.csv"
NO_DATA_MESSAGE = "CSV parsing completed but no valid data found"
NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}


class ContactsLoadError(Exception):
    """The CSV could not be fetched or yielded no contacts."""


# ---------------- Parsing ----------------
def split_fields(line: str) -> List[str]:
    """Split on commas outside double-quoted spans. Empty fields are kept."""
    fields: List[str] = []
    buf: List[str] = []
    quoted = False
    for ch in line:
        if ch == '"':
            quoted = not quoted
            buf.append(ch)
        elif ch == "," and not quoted:
            fields.append("".join(buf))
            buf = []
        else:
            buf.append(ch)
    fields.append("".join(buf))
    return fields


def clean_token(value: str) -> str:
    s = value.strip()
    if s.startswith('"'):
        s = s[1:]
    if s.endswith('"'):
        s = s[:-1]
    return s.strip()


def empty_contacts() -> pd.DataFrame:
    return pd.DataFrame(columns=list(FIELDS), dtype=object)


def fallback_contacts() -> pd.DataFrame:
    return pd.DataFrame([{f: SENTINEL for f in FIELDS}], columns=list(FIELDS))


def _parse_rows(text: str) -> List[List[str]]:
    cleaned = text.replace("\r\n", "\n").replace("\r", "\n").replace('""', '"').strip()
    lines = [line for line in cleaned.split("\n") if line.strip()]
    if len(lines) < 2:
        return []

    headers = [clean_token(h) for h in split_fields(lines[0])]
    if len(headers) != len(FIELDS):
        logger.info("CSV header has %d fields, using canonical header", len(headers))
        headers = list(FIELDS)

    rows: List[List[str]] = []
    for line in lines[1:]:
        values = split_fields(line)
        if len(values) != len(headers):
            continue
        rows.append([clean_token(v) for v in values])
    return rows


def parse_contacts(text: str) -> pd.DataFrame:
    """Parse contacts CSV text into a frame with the canonical columns.

    Values map onto FIELDS by position. Rows with the wrong number of fields
    are dropped. Never raises: malformed input yields an empty frame.
    """
    try:
        rows = _parse_rows(text)
    except Exception as exc:
        logger.warning("CSV parsing failed: %s", exc)
        return empty_contacts()
    if not rows:
        return empty_contacts()
    return pd.DataFrame(rows, columns=list(FIELDS))


# ---------------- Loading ----------------
@dataclass(frozen=True)
class LoadResult:
    contacts: pd.DataFrame = field(default_factory=empty_contacts)
    error: str = ""
    using_fallback: bool = False

    @property
    def ok(self) -> bool:
        return not self.using_fallback


def fetch_csv_text(url: str = CSV_URL) -> str:
    req = Request(url, headers=NO_CACHE_HEADERS)
    try:
        with urlopen(req) as resp:
            status = getattr(resp, "status", 200)
            if not 200 <= status < 300:
                raise ContactsLoadError(f"Server returned {status}")
            charset = resp.headers.get_content_charset() or "utf-8"
            return resp.read().decode(charset)
    except HTTPError as exc:
        raise ContactsLoadError(f"Server returned {exc.code}") from exc
    except (HTTPException, LookupError, UnicodeDecodeError) as exc:
        raise ContactsLoadError(f"Could not read response: {exc!r}") from exc


def load_contacts(url: str = CSV_URL, fetch: Callable[[str], str] = fetch_csv_text) -> LoadResult:
    try:
        contacts = parse_contacts(fetch(url))
        if contacts.empty:
            raise ContactsLoadError(NO_DATA_MESSAGE)
    except (ContactsLoadError, HTTPException, LookupError, OSError, ValueError) as exc:
        message = str(exc) or "Failed to load data"
        logger.warning("Loading contacts from %s failed: %s", url, message)
        return LoadResult(contacts=fallback_contacts(), error=message, using_fallback=True)
    logger.info("Loaded %d contacts from %s", len(contacts), url)
    return LoadResult(contacts=contacts)


@lru_cache(maxsize=1)
def _load_contacts_cached(url: str) -> LoadResult:
    return load_contacts(url)


def get_load_result(url: str = CSV_URL) -> LoadResult:
    """Load once per process; later calls reuse the first outcome."""
    return _load_contacts_cached(url)


# ---------------- Derived views ----------------
def prepare_context(filters: dict | ContactFilters, load_result: LoadResult) -> Dict[str, object]:
    """Recompute every derived view from the current state."""
    filt = filters if isinstance(filters, ContactFilters) else normalize_filters(filters)
    contacts = load_result.contacts
    visible = filter_contacts(contacts, filt.search_field, filt.query)
    return {
        "filters": filt,
        "contacts": contacts,
        "visible": visible,
        "summary": summarize_by(contacts, filt.summary_field),
        "view": select_detail_view(visible, filt.search_field),
        "error": load_result.error,
        "using_fallback": load_result.using_fallback,
    }


def describe_load(load_result: LoadResult) -> Optional[str]:
    if not load_result.using_fallback:
        return None
    return f"Showing placeholder data: {load_result.error}" if load_result.error else "Showing placeholder data."
