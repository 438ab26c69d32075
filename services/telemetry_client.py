# services/telemetry_client.py
"""
Device-side sender: posts telemetry records to a running ingest endpoint.

    python -m services.telemetry_client http://localhost:8000/ readings.json
    cat readings.json | python -m services.telemetry_client http://localhost:8000/
"""
import json
import sys
from typing import Any, Dict, List, Optional

import requests

from services.ingest_config import PARSE_ERR_MSG


def post_telemetry(url: str, records: List[Dict[str, Any]], timeout: float = 15) -> str:
    """POST {"data": records} and return the endpoint's text reply."""
    r = requests.post(
        url,
        json={"data": records},
        timeout=timeout,
    )
    r.raise_for_status()
    return r.text


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if not argv or len(argv) > 2:
        print("usage: python -m services.telemetry_client URL [FILE]", file=sys.stderr)
        return 2

    url = argv[0]
    if len(argv) == 2:
        with open(argv[1], "r", encoding="utf-8") as f:
            records = json.load(f)
    else:
        records = json.load(sys.stdin)

    if isinstance(records, dict):
        records = [records]

    reply = post_telemetry(url, records)
    print(reply)
    return 1 if reply.startswith(PARSE_ERR_MSG) else 0


if __name__ == "__main__":
    sys.exit(main())
