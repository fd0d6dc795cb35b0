import altair as alt
import pandas as pd
import streamlit as st
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from core.data import describe_load, load_contacts, prepare_context
from core.fields import FIELDS, SUMMARY_FIELDS, field_label
from core.metrics_contacts import VIEW_COMPANY, VIEW_PERSON, VIEW_TABLE, compute_contacts, display_rows
from core.metrics_summary import compute_summary

alt.data_transformers.disable_max_rows()
# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .app-top-bar {padding: 6px 0 4px;border-bottom: 1px solid #e5e7eb;margin-bottom: 10px;}
        .app-top-bar .page-title {font-size: 1.4rem;font-weight: 700;color: #2A2D77;}
        .card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px; text-align: center;}
        .card-title {font-weight: 600;font-size: 1.2rem;color: #111827;margin-bottom: 8px;}
        .chip-row {display: flex;flex-wrap: wrap;gap: 6px;margin-top: 6px;}
        .chip {background: #f3f4f6;border: 1px solid #e5e7eb;border-radius: 14px;padding: 4px 10px;font-size: 0.85rem;color: #374151;}
        .badge {padding: 0.5rem 1rem;color: #fff;border-radius: 20px;display: inline-block;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str):
    container = st.container()
    container.markdown(
        f"""
        <div class="card">
          <div class="card-title">{title}</div>
        """,
        unsafe_allow_html=True,
    )
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def format_filter_summary(search_field: str, query: str, summary_field: str, row_count: int, total_count: int) -> str:
    search_chip = f"Search: {field_label(search_field)} contains “{query}”" if query else f"Search: {field_label(search_field)} (all)"
    summary_chip = f"Summary by: {field_label(summary_field)}"
    rows_chip = f"Rows: {row_count} of {total_count}"
    return "".join([f"<span class='chip'>{txt}</span>" for txt in [search_chip, summary_chip, rows_chip]])


def render_page_header(title: str, filter_summary_html: str, export_df: Optional[pd.DataFrame] = None, export_name: str = "contacts.csv"):
    inject_base_styles()
    c1, c2 = st.columns([8, 2])
    with c1:
        st.markdown(f"<div class='app-top-bar'><div class='page-title'>{title}</div></div>", unsafe_allow_html=True)
    with c2:
        if export_df is not None and not export_df.empty:
            st.download_button(
                "Export CSV",
                data=export_df.to_csv(index=False).encode("utf-8"),
                file_name=export_name,
                mime="text/csv",
            )
    st.markdown(f"<div class='chip-row'>{filter_summary_html}</div>", unsafe_allow_html=True)


def toggle_button(label_on: str, label_off: str, key: str, column) -> bool:
    if key not in st.session_state:
        st.session_state[key] = True
    label = label_on if st.session_state[key] else label_off
    if column.button(label, key=f"{key}_btn"):
        st.session_state[key] = not st.session_state[key]
        st.rerun()
    return st.session_state[key]


def render_doughnut(payload: Dict[str, Any]):
    st.markdown("<h3 style='text-align:center'>Doughnut Chart Summary</h3>", unsafe_allow_html=True)
    spec = payload["charts"].get("doughnut")
    if spec:
        st.vega_lite_chart(spec, use_container_width=False)
    legend = "".join(
        f"<span style='display:inline-flex;align-items:center;gap:0.4rem;margin:0 0.5rem'>"
        f"<span style='width:16px;height:16px;border-radius:50%;background:{b['color']};display:inline-block'></span>"
        f"{b['label']} ({b['count']})</span>"
        for b in payload["badges"]
    )
    st.markdown(f"<div style='text-align:center'>{legend}</div>", unsafe_allow_html=True)


def render_badges(badges: List[Dict[str, Any]]):
    html = " ".join(
        f"<span class='badge' style='background:{b['color']}'><strong>{b['label']}</strong>: {b['percent']:.1f}%</span>"
        for b in badges
    )
    st.markdown(f"<div style='display:flex;flex-wrap:wrap;gap:1rem;margin-bottom:2rem'>{html}</div>", unsafe_allow_html=True)


def render_detail(view: str, detail: Dict[str, str]):
    with card(detail["title"]):
        if view == VIEW_PERSON:
            st.markdown(f"**Company:** {detail['company']}")
        else:
            st.markdown(f"**Contact:** {detail['contact']}")
        st.markdown(f"**Address:** {detail['address']}")
        st.markdown(f"**Phone:** {detail['phone']}")
        st.markdown(f"**Email:** {detail['email']}")
        if view == VIEW_PERSON and detail.get("web"):
            st.markdown(f"**Website:** [{detail['web']}]({detail['web']})")


# ---------- UI setup ----------
st.set_page_config(page_title="Contacts Dashboard", layout="wide")
inject_base_styles()

# One fetch per browser session; no refresh or retry.
if "load_result" not in st.session_state:
    with st.spinner("Loading..."):
        st.session_state["load_result"] = load_contacts()
load_result = st.session_state["load_result"]

notice = describe_load(load_result)
if notice:
    st.error(notice)

# ----- Controls -----
search_col, query_col = st.columns([2, 6])
search_field = search_col.selectbox("Search by", options=list(FIELDS), index=FIELDS.index("state"), format_func=field_label)
query = query_col.text_input("Query", value="", placeholder=f"Search {field_label(search_field)}")

btn_cols = st.columns([2, 2, 2, 4])
show_visual_summary = toggle_button("Hide Doughnut Chart", "Show Doughnut Chart", "show_visual_summary", btn_cols[0])
show_summary = toggle_button("Hide Summary", "Show Summary", "show_summary", btn_cols[1])
summary_field = btn_cols[2].selectbox("Summarize by", options=list(SUMMARY_FIELDS), index=0, format_func=field_label)

filters = {"search_field": search_field, "query": query, "summary_field": summary_field}
ctx = prepare_context(filters, load_result)
f = ctx["filters"]
contacts_payload = compute_contacts(f, ctx)
summary_payload = compute_summary(f, ctx)

render_page_header(
    "Contacts Dashboard",
    format_filter_summary(f.search_field, f.query, f.summary_field, contacts_payload["row_count"], contacts_payload["total_count"]),
    export_df=ctx["visible"],
)

if show_visual_summary and summary_payload["badges"]:
    render_doughnut(summary_payload)

if show_summary and summary_payload["badges"]:
    render_badges(summary_payload["badges"])

view = contacts_payload["view"]
if view in (VIEW_PERSON, VIEW_COMPANY):
    render_detail(view, contacts_payload["detail"])

if view == VIEW_TABLE:
    table = display_rows(ctx["visible"]).rename(columns={c: field_label(c) for c in FIELDS})
    st.dataframe(table, hide_index=True, use_container_width=True)
