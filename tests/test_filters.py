# tests/test_filters.py
import pandas as pd
import pytest

from core.fields import FIELDS
from core.filters import ContactFilters, filter_contacts, normalize_filters


def _contacts(**columns):
    n = len(next(iter(columns.values())))
    data = {f: columns.get(f, [""] * n) for f in FIELDS}
    return pd.DataFrame(data, columns=list(FIELDS))


def test_empty_query_returns_full_set():
    df = _contacts(state=["NV", "UT"])
    assert filter_contacts(df, "state", "") is df


def test_case_insensitive_substring_on_selected_field():
    df = _contacts(company_name=["Acme Corp", "beta", "ACMESoft"], first_name=["acme", "x", "y"])
    out = filter_contacts(df, "company_name", "acme")
    assert out["company_name"].tolist() == ["Acme Corp", "ACMESoft"]


def test_only_selected_field_is_searched():
    df = _contacts(city=["Reno", "Provo"], county=["Provo County", "Utah"])
    out = filter_contacts(df, "city", "provo")
    assert out["city"].tolist() == ["Provo"]


def test_result_is_ordered_subset():
    df = _contacts(email=["a@x.com", "b@y.com", "c@x.com", "d@x.org"])
    out = filter_contacts(df, "email", "@X.")
    assert out.index.tolist() == [0, 2, 3]
    assert set(out.index).issubset(df.index)


def test_query_is_literal_not_regex():
    df = _contacts(web=["http://a.com", "http://abcom"])
    out = filter_contacts(df, "web", "a.com")
    assert out["web"].tolist() == ["http://a.com"]


def test_no_match_gives_empty_frame():
    df = _contacts(state=["NV"])
    assert filter_contacts(df, "state", "zz").empty


def test_unknown_field_raises():
    df = _contacts(state=["NV"])
    with pytest.raises(ValueError):
        filter_contacts(df, "nickname", "x")


def test_normalize_filters_defaults_and_coercion():
    assert normalize_filters({}) == ContactFilters()
    f = normalize_filters({"search_field": "bogus", "query": None, "summary_field": "email"})
    assert f.search_field == "state"
    assert f.query == ""
    assert f.summary_field == "state"
    f = normalize_filters({"search_field": "company_name", "query": " acme", "summary_field": "city"})
    assert f == ContactFilters(search_field="company_name", query=" acme", summary_field="city")
