from __future__ import annotations

import json
import os
from typing import Any, Dict

import requests
from fastapi import Body, FastAPI, HTTPException, Query

from netsecdash.aggregation.aggregate import AggregateResult, InvalidInput, aggregate
from netsecdash.aggregation.views import all_series
from netsecdash.config import SETTINGS
from netsecdash.io.records import load_records
from netsecdash.schemas import AggregateResponse, ViewsResponse


def _records_source() -> str:
    return os.environ.get("NETSECDASH_RECORDS") or SETTINGS.records


def _aggregate_or_400(records: Any) -> AggregateResult:
    try:
        return aggregate(records)
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=f"Invalid record batch: {e}") from e


def _load_configured() -> Any:
    source = _records_source()
    try:
        return load_records(source)
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=f"Record source not found: {source}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise HTTPException(status_code=400, detail=f"Record source is not a JSON document: {e}") from e
    except requests.RequestException as e:
        print(f"ERROR fetching {source}: {type(e).__name__}: {e}")
        raise HTTPException(status_code=502, detail=f"Could not fetch records from {source}") from e


app = FastAPI(title="Network Security Dashboard API", version="0.1.0")


@app.get("/health")
def health() -> Dict[str, Any]:
    return {"ok": True, "records": _records_source()}


@app.post("/aggregate", response_model=AggregateResponse)
def aggregate_batch(records: Any = Body(...)) -> Dict[str, Any]:
    return _aggregate_or_400(records).to_dict()


@app.get("/aggregate", response_model=AggregateResponse)
def aggregate_configured() -> Dict[str, Any]:
    return _aggregate_or_400(_load_configured()).to_dict()


@app.post("/views", response_model=ViewsResponse)
def views_batch(
    records: Any = Body(...),
    fill_gaps: bool = Query(default=SETTINGS.fill_hours),
) -> Dict[str, Any]:
    res = _aggregate_or_400(records)
    return {name: s.to_dict() for name, s in all_series(res, fill_gaps=fill_gaps).items()}


@app.get("/views", response_model=ViewsResponse)
def views_configured(fill_gaps: bool = Query(default=SETTINGS.fill_hours)) -> Dict[str, Any]:
    res = _aggregate_or_400(_load_configured())
    return {name: s.to_dict() for name, s in all_series(res, fill_gaps=fill_gaps).items()}
