"""
Unit tests for loading record batches from files and URLs.
"""

import json
from unittest.mock import MagicMock

import pytest
import requests

from netsecdash.io import records as records_mod
from netsecdash.io.records import is_url, load_records, read_ndjson, read_records


SAMPLE = [
    {"event_type": "flow", "src_ip": "10.0.0.1", "timestamp": "2024-01-01T10:15:00Z"},
    {"event_type": "alert", "src_ip": "10.0.0.2", "timestamp": "2024-01-01T10:05:00Z", "alert": {"category": "scan"}},
]


class TestReadRecords:
    def test_json_array(self, tmp_path):
        p = tmp_path / "output.json"
        p.write_text(json.dumps(SAMPLE, indent=2), encoding="utf-8")
        assert read_records(p) == SAMPLE

    def test_ndjson(self, tmp_path):
        p = tmp_path / "eve.json"
        p.write_text("\n".join(json.dumps(r) for r in SAMPLE) + "\n\n", encoding="utf-8")
        assert read_records(p) == SAMPLE
        assert list(read_ndjson(p)) == SAMPLE

    def test_single_object_is_returned_as_is(self, tmp_path):
        """Not repaired here; the aggregator rejects it."""
        p = tmp_path / "one.json"
        p.write_text(json.dumps(SAMPLE[0]), encoding="utf-8")
        assert read_records(p) == SAMPLE[0]

    def test_garbage_raises(self, tmp_path):
        p = tmp_path / "bad.json"
        p.write_text("[1, 2", encoding="utf-8")
        with pytest.raises(json.JSONDecodeError):
            read_records(p)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_records(tmp_path / "nope.json")


class TestFetch:
    def test_is_url(self):
        assert is_url("http://host/output.json")
        assert is_url("https://host/output.json")
        assert not is_url("output.json")

    def test_load_records_dispatches_to_http(self, monkeypatch):
        resp = MagicMock()
        resp.json.return_value = SAMPLE
        get = MagicMock(return_value=resp)
        monkeypatch.setattr(records_mod.requests, "get", get)

        out = load_records("http://dash.local/output.json", timeout=3)

        assert out == SAMPLE
        get.assert_called_once_with("http://dash.local/output.json", timeout=3)
        resp.raise_for_status.assert_called_once()

    def test_http_error_propagates(self, monkeypatch):
        resp = MagicMock()
        resp.raise_for_status.side_effect = requests.HTTPError("404")
        monkeypatch.setattr(records_mod.requests, "get", MagicMock(return_value=resp))

        with pytest.raises(requests.HTTPError):
            load_records("https://dash.local/output.json")

    def test_load_records_path(self, tmp_path):
        p = tmp_path / "output.json"
        p.write_text(json.dumps(SAMPLE), encoding="utf-8")
        assert load_records(str(p)) == SAMPLE
        assert load_records(p) == SAMPLE
