from __future__ import annotations

import logging
import math

import numpy as np
import pandas as pd
from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.responses import Response

from api.schemas import ContactFiltersModel, MetaFieldsResponse, MetaStatusResponse
from core.data import get_load_result, prepare_context
from core.fields import FIELDS, SUMMARY_FIELDS
from core.filters import ContactFilters, normalize_filters
from core.metrics_contacts import compute_contacts
from core.metrics_summary import compute_summary


app = FastAPI(title="Contacts Dashboard API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _filters_from_model(model: ContactFiltersModel) -> ContactFilters:
    return normalize_filters(model.model_dump())


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
            },
        )
    )


def _error(exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


@app.get("/meta/fields", response_model=MetaFieldsResponse)
def meta_fields():
    return MetaFieldsResponse(fields=list(FIELDS), summary_fields=list(SUMMARY_FIELDS))


@app.get("/meta/status", response_model=MetaStatusResponse)
def meta_status():
    try:
        result = get_load_result()
        return MetaStatusResponse(rows=len(result.contacts), error=result.error, using_fallback=result.using_fallback)
    except Exception as exc:
        logger.exception("meta_status failed")
        return _error(exc)


@app.post("/contacts")
def contacts(filters: ContactFiltersModel):
    try:
        f = _filters_from_model(filters)
        ctx = prepare_context(f, get_load_result())
        return _json(compute_contacts(f, ctx))
    except Exception as exc:
        logger.exception("contacts failed")
        return _error(exc)


@app.post("/summary")
def summary(filters: ContactFiltersModel):
    try:
        f = _filters_from_model(filters)
        ctx = prepare_context(f, get_load_result())
        return _json(compute_summary(f, ctx))
    except Exception as exc:
        logger.exception("summary failed")
        return _error(exc)


@app.post("/export/contacts")
def export_contacts(filters: ContactFiltersModel):
    f = _filters_from_model(filters)
    ctx = prepare_context(f, get_load_result())
    export_df = ctx.get("visible")
    if export_df is None or not hasattr(export_df, "to_csv"):
        export_df = pd.DataFrame(columns=list(FIELDS))
    csv_bytes = export_df.to_csv(index=False).encode("utf-8")
    return Response(content=csv_bytes, media_type="text/csv", headers={"Content-Disposition": "attachment; filename=contacts.csv"})
