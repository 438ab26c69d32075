# services/telemetry.py
import json
from dataclasses import dataclass, fields
from typing import Any, Dict, List, Union

# Column order in the sheet; producer and consumer agree on this externally.
FIELDS = ("timestamp", "temperature", "humidity", "light", "deviceID", "region", "location")

# Written for absent or null fields
EMPTY = ""

Row = List[Any]


class MalformedPayload(ValueError):
    """Request body is not JSON or has no usable `data` array."""


@dataclass
class TelemetryRecord:
    timestamp: Any = EMPTY
    temperature: Any = EMPTY
    humidity: Any = EMPTY
    light: Any = EMPTY
    deviceID: Any = EMPTY
    region: Any = EMPTY
    location: Any = EMPTY

    @classmethod
    def from_json(cls, entry: Dict[str, Any]) -> "TelemetryRecord":
        """Permissive decode: unknown keys are ignored, missing ones stay EMPTY."""
        kwargs = {}
        for f in fields(cls):
            value = entry.get(f.name)
            kwargs[f.name] = EMPTY if value is None else value
        return cls(**kwargs)

    def to_row(self) -> Row:
        return [getattr(self, name) for name in FIELDS]


def _reject_constant(name: str):
    raise MalformedPayload(f"invalid JSON constant {name}")


def parse_payload(body: Union[str, bytes]) -> List[TelemetryRecord]:
    """
    Decode a POST body of the form {"data": [{...}, ...]}.
    Raises MalformedPayload for anything that cannot be mapped to records.
    """
    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedPayload(str(e)) from e

    try:
        payload = json.loads(body, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise MalformedPayload(str(e)) from e

    if not isinstance(payload, dict):
        raise MalformedPayload(f"expected a JSON object, got {type(payload).__name__}")
    if "data" not in payload:
        raise MalformedPayload("missing field 'data'")

    data = payload["data"]
    if not isinstance(data, list):
        raise MalformedPayload(f"'data' must be an array, got {type(data).__name__}")

    records: List[TelemetryRecord] = []
    for i, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise MalformedPayload(f"data[{i}] must be an object, got {type(entry).__name__}")
        records.append(TelemetryRecord.from_json(entry))
    return records


def to_rows(records: List[TelemetryRecord]) -> List[Row]:
    return [r.to_row() for r in records]
