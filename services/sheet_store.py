# services/sheet_store.py
import json
import logging
import threading
from typing import Any, Dict, List, Optional, Tuple

import gspread
from gspread.utils import rowcol_to_a1
from google.oauth2.service_account import Credentials

from services.ingest_config import (
    SPREADSHEET_ID,
    SHEET_NAME,
    GOOGLE_SERVICE_ACCOUNT_JSON,
    GOOGLE_APPLICATION_CREDENTIALS,
    SCOPES,
)

logger = logging.getLogger("sensor_ingest")

# One lock per (spreadsheet, sheet): last_row() + write must not interleave
_LOCKS: Dict[Tuple[str, str], threading.Lock] = {}
_LOCKS_GUARD = threading.Lock()

# Columns A..G hold the seven telemetry fields
DATA_RANGE = "A:G"


def lock_for(spreadsheet_id: str, sheet_name: str) -> threading.Lock:
    key = (spreadsheet_id, sheet_name)
    with _LOCKS_GUARD:
        lock = _LOCKS.get(key)
        if lock is None:
            lock = _LOCKS[key] = threading.Lock()
        return lock


def make_client() -> gspread.Client:
    """Authorize a gspread client with the configured service account."""
    if GOOGLE_SERVICE_ACCOUNT_JSON:
        info = json.loads(GOOGLE_SERVICE_ACCOUNT_JSON)
        creds = Credentials.from_service_account_info(info, scopes=SCOPES)
    elif GOOGLE_APPLICATION_CREDENTIALS:
        creds = Credentials.from_service_account_file(GOOGLE_APPLICATION_CREDENTIALS, scopes=SCOPES)
    else:
        raise RuntimeError(
            "No Google credentials: set GOOGLE_SERVICE_ACCOUNT_JSON or GOOGLE_APPLICATION_CREDENTIALS"
        )
    return gspread.authorize(creds)


class SheetStore:
    """
    Append-only handle on one worksheet of one Google spreadsheet.

    The spreadsheet is opened by key on every append; the sheet itself is
    never created or reshaped apart from growing the grid when it is full.
    """

    def __init__(self, spreadsheet_id: str, sheet_name: str, client: Optional[Any] = None):
        self.spreadsheet_id = spreadsheet_id
        self.sheet_name = sheet_name
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = make_client()
        return self._client

    def open(self) -> gspread.Worksheet:
        return self.client.open_by_key(self.spreadsheet_id).worksheet(self.sheet_name)

    def last_row(self, ws: Optional[gspread.Worksheet] = None) -> int:
        """
        Index of the last occupied row, 0 for an empty sheet.
        Reads the data columns only; the API trims trailing empty rows.
        """
        if ws is None:
            ws = self.open()
        return len(ws.get_values(DATA_RANGE))

    def append_rows(self, rows: List[List[Any]]) -> Optional[int]:
        """Write rows after the last occupied row. Returns the first row written, or None."""
        if not rows:
            return None

        with lock_for(self.spreadsheet_id, self.sheet_name):
            ws = self.open()
            start = self.last_row(ws) + 1
            end = start + len(rows) - 1
            if end > ws.row_count:
                ws.add_rows(end - ws.row_count)

            rng = f"{rowcol_to_a1(start, 1)}:{rowcol_to_a1(end, len(rows[0]))}"
            ws.update(values=rows, range_name=rng, value_input_option="RAW")

        logger.info(f"sheet_append sheet={self.sheet_name} rows={len(rows)} start={start}")
        return start


def from_config() -> SheetStore:
    if not SPREADSHEET_ID:
        raise RuntimeError("SPREADSHEET_ID is not configured")
    return SheetStore(SPREADSHEET_ID, SHEET_NAME)
