import pytest

from app import app as flask_app


class FakeSheetStore:
    """In-memory stand-in for SheetStore: a list of rows, appended at len()+1."""

    def __init__(self, rows=None):
        self.rows = [list(r) for r in (rows or [])]
        self.writes = []

    def last_row(self):
        return len(self.rows)

    def append_rows(self, rows):
        if not rows:
            return None
        start = self.last_row() + 1
        self.rows.extend(rows)
        self.writes.append((start, rows))
        return start


@pytest.fixture
def store():
    return FakeSheetStore()


@pytest.fixture
def client(store):
    flask_app.config.update(TESTING=True, SHEET_STORE=store)
    with flask_app.test_client() as c:
        yield c
    flask_app.config["SHEET_STORE"] = None
