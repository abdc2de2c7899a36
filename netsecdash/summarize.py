from __future__ import annotations

import argparse
import json
import sys
from typing import List

import requests

from netsecdash.aggregation.aggregate import InvalidInput, aggregate
from netsecdash.aggregation.views import all_series
from netsecdash.config import SETTINGS
from netsecdash.io.records import load_records


def main(argv: List[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Aggregate a batch of security events and print the dashboard tables as JSON.")
    p.add_argument("source", nargs="?", default=SETTINGS.records, help="JSON array file, NDJSON file or http(s) URL")
    p.add_argument("--views", action="store_true", help="Print chart series instead of the raw tables")
    p.add_argument("--fill-gaps", action="store_true", default=SETTINGS.fill_hours, help="Zero-fill empty hours in time series")
    p.add_argument("--indent", type=int, default=2, help="JSON indent")
    args = p.parse_args(argv)

    try:
        records = load_records(args.source)
    except FileNotFoundError:
        print(f"Record source not found: {args.source}", file=sys.stderr)
        return 1
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        print(f"Record source is not a JSON document: {args.source}: {e}", file=sys.stderr)
        return 1
    except requests.RequestException as e:
        print(f"Could not fetch records from {args.source}: {type(e).__name__}: {e}", file=sys.stderr)
        return 1

    try:
        res = aggregate(records)
    except InvalidInput as e:
        print(f"Invalid record batch in {args.source}: {e}", file=sys.stderr)
        return 2

    if args.views:
        out = {name: s.to_dict() for name, s in all_series(res, fill_gaps=args.fill_gaps).items()}
    else:
        out = res.to_dict()
    print(json.dumps(out, indent=args.indent))
    print(
        f"records={res.record_count} alerts={res.alert_count} "
        f"categories={len(res.alert_category_counts)} malformed_ts={res.malformed_timestamps}",
        file=sys.stderr,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
