# tests/test_contacts_view.py
from core.data import LoadResult, fallback_contacts, parse_contacts, prepare_context
from core.filters import ContactFilters
from core.metrics_contacts import (
    VIEW_COMPANY,
    VIEW_PERSON,
    VIEW_TABLE,
    build_detail,
    compute_contacts,
    select_detail_view,
)


def _ctx(sample_csv, **filters):
    return prepare_context(filters, LoadResult(contacts=parse_contacts(sample_csv)))


def test_single_match_on_first_name_selects_person(sample_csv):
    ctx = _ctx(sample_csv, search_field="first_name", query="jos")
    assert len(ctx["visible"]) == 1
    assert ctx["view"] == VIEW_PERSON


def test_single_match_on_company_selects_company(sample_csv):
    ctx = _ctx(sample_csv, search_field="company_name", query="chemel")
    assert ctx["view"] == VIEW_COMPANY


def test_single_match_on_other_field_stays_table(sample_csv):
    ctx = _ctx(sample_csv, search_field="state", query="MI")
    assert len(ctx["visible"]) == 1
    assert ctx["view"] == VIEW_TABLE


def test_multiple_or_zero_matches_stay_table(sample_csv):
    assert _ctx(sample_csv, search_field="first_name", query="")["view"] == VIEW_TABLE
    assert _ctx(sample_csv, search_field="first_name", query="nobody")["view"] == VIEW_TABLE


def test_select_detail_view_last_name(sample_csv):
    visible = parse_contacts(sample_csv).head(1)
    assert select_detail_view(visible, "last_name") == VIEW_PERSON


def test_person_detail_card():
    record = fallback_contacts().iloc[0].to_dict()
    record.update(
        first_name="James", last_name="Butt", company_name="Benton", address="6649 N Blue Gum St",
        city="New Orleans", state="LA", zip="70116", phone1="", phone2="504-845-1427",
    )
    detail = build_detail(record, VIEW_PERSON)
    assert detail["title"] == "James Butt"
    assert detail["address"] == "6649 N Blue Gum St, New Orleans, LA 70116"
    assert detail["phone"] == "504-845-1427"
    record["phone2"] = ""
    assert build_detail(record, VIEW_COMPANY)["phone"] == "N/A"
    assert build_detail(record, VIEW_COMPANY)["contact"] == "James Butt"
    assert build_detail(record, VIEW_TABLE) is None


def test_compute_contacts_table_payload(sample_csv):
    ctx = _ctx(sample_csv, search_field="state", query="")
    payload = compute_contacts(ctx["filters"], ctx)
    assert payload["view"] == VIEW_TABLE
    assert payload["detail"] is None
    assert payload["row_count"] == payload["total_count"] == 3
    assert payload["rows"][0]["company_name"] == "Benton, John B Jr"


def test_compute_contacts_detail_payload(sample_csv):
    ctx = _ctx(sample_csv, search_field="company_name", query="CHANAY")
    payload = compute_contacts(ctx["filters"], ctx)
    assert payload["view"] == VIEW_COMPANY
    assert payload["rows"] == []
    assert payload["detail"]["title"] == "Chanay, Jeffrey A Esq"


def test_fallback_rows_show_marker():
    result = LoadResult(contacts=fallback_contacts(), error="boom", using_fallback=True)
    ctx = prepare_context(ContactFilters(), result)
    payload = compute_contacts(ctx["filters"], ctx)
    assert payload["rows"] == [{k: "-" for k in payload["rows"][0]}]
    assert payload["status"] == {"error": "boom", "using_fallback": True}
    assert ctx["summary"] == {"-": 1}
