"""Pytest configuration and fixtures."""

import pytest

from config import Config
from core.sheets import SheetsManager


class FakeSpreadsheet:
    """Stands in for gspread.Spreadsheet: values keyed by A1 range."""

    def __init__(self, ranges=None, error=None):
        self.ranges = dict(ranges or {})
        self.error = error
        self.reads = []
        self.appends = []

    def values_get(self, range_name, params=None):
        self.reads.append(range_name)
        if self.error is not None:
            raise self.error
        response = {"range": range_name, "majorDimension": "ROWS"}
        if range_name in self.ranges:
            response["values"] = self.ranges[range_name]
        return response

    def values_append(self, range_name, params, body):
        if self.error is not None:
            raise self.error
        self.appends.append((range_name, params, body))
        return {"updates": {"updatedRows": len(body["values"])}}


class FakeClient:
    def __init__(self, spreadsheet):
        self.spreadsheet = spreadsheet
        self.opened = []

    def open_by_key(self, key):
        self.opened.append(("key", key))
        return self.spreadsheet

    def open_by_url(self, url):
        self.opened.append(("url", url))
        return self.spreadsheet


TEST_SECRET = "test-secret-0123456789abcdefghijklmnop"

DATA_ROWS = [
    ["B1", "P1", "10", "", "G"],
    ["b1", "P2", "10", "N", ""],
    ["", "P9", "99", "X"],
    ["B2", "P1", "20", "", "", "", "", "", "", "", "", "", "", "", "", "", "", "", "", "Sold", "2024-01-02", "Red"],
    ["B1", "P3", "12"],
]

USER_ROWS = [
    ["1", "alice", "wonderland", "alice@example.com"],
    ["2", "Bob", "builder", "bob@example.com"],
]


@pytest.fixture(autouse=True)
def test_config(monkeypatch):
    """Deterministic configuration for every test."""
    monkeypatch.setattr(Config, "IS_CI", True)
    monkeypatch.setattr(Config, "JWT_SECRET", TEST_SECRET)
    monkeypatch.setattr(Config, "JWT_EXPIRES_HOURS", 24)
    monkeypatch.setattr(Config, "REQUIRE_AUTH", True)
    monkeypatch.setattr(Config, "GOOGLE_SHEETS_ID", "sheet-123")
    monkeypatch.setattr(Config, "GOOGLE_SHEET_URL", "")
    monkeypatch.setattr(Config, "DATA_RANGE", "Data!A2:W")


@pytest.fixture
def spreadsheet():
    return FakeSpreadsheet({
        "Data!A2:W": [list(row) for row in DATA_ROWS],
        "User!A2:D": [list(row) for row in USER_ROWS],
    })


@pytest.fixture
def sheets(spreadsheet):
    return SheetsManager(FakeClient(spreadsheet))
