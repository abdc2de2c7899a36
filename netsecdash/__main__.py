from __future__ import annotations


def main() -> int:
    print(
        "netsecdash package. Common commands:\n"
        "  python -m netsecdash.summarize output.json --views\n"
        "  uvicorn netsecdash.api.main:app --host 127.0.0.1 --port 8000\n"
        "  streamlit run netsecdash/dashboard/app.py\n"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
