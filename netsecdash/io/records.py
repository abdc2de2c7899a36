from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterator

import requests

from netsecdash.config import SETTINGS


def read_ndjson(path: str | Path) -> Iterator[Dict]:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            yield json.loads(line)


def read_records(path: str | Path) -> Any:
    """Read an `output.json` array document or an `eve.json` NDJSON stream.

    The document is returned as decoded; a top level that is not an array is
    left for the aggregator to reject.
    """
    p = Path(path)
    text = p.read_text(encoding="utf-8")
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        if not text.lstrip().startswith("{"):
            raise
    return list(read_ndjson(p))


def fetch_records(url: str, timeout: float | None = None) -> Any:
    r = requests.get(url, timeout=timeout if timeout is not None else SETTINGS.fetch_timeout)
    r.raise_for_status()
    return r.json()


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def load_records(source: str | Path, timeout: float | None = None) -> Any:
    if isinstance(source, str) and is_url(source):
        return fetch_records(source, timeout=timeout)
    return read_records(source)
