"""
================================================================================
SEARCH.PY - FILTER & PROJECT ENGINE
================================================================================
PURPOSE: Narrow raw "Data" tab rows down to the ones matching a block number
         (plus optional part number / thickness) and prune columns that carry
         no data anywhere in the result set.

FEATURES:
  - Case-insensitive exact matching on the block number and any secondary key
  - Rows without a block number are never returned
  - Two passes: build full records, then compute the active field set and
    project every record onto it
  - Source row order is preserved
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence

from core.errors import InvalidQuery
from core.logger import log_msg
from core.schema import (
    ALWAYS_SHOWN,
    COLUMN_BY_NAME,
    FIELD_NAMES,
    PRIMARY_KEY,
    cell,
    row_to_record,
)

# Request parameter -> schema field for the optional criteria
SECONDARY_PARAMS = ("partNo", "thickness")


@dataclass
class SearchQuery:
    """Required block number plus optional secondary criteria."""

    primary_key: str
    secondary_keys: Dict[str, Optional[str]] = field(default_factory=dict)

    def __post_init__(self):
        if not self.primary_key:
            raise InvalidQuery("Block number is required")
        for name in self.secondary_keys:
            if name not in COLUMN_BY_NAME or name == PRIMARY_KEY:
                raise InvalidQuery(f"Unknown search field: {name}")

    @classmethod
    def from_params(cls, params: Optional[Mapping[str, Optional[str]]]) -> "SearchQuery":
        """Build a query from request parameters (blockNo, partNo, thickness)."""
        params = params or {}
        return cls(
            primary_key=params.get(PRIMARY_KEY) or "",
            secondary_keys={name: params.get(name) for name in SECONDARY_PARAMS},
        )

    def constraints(self) -> Dict[str, str]:
        """Return the case-folded criteria that actually constrain the match."""
        wanted = {PRIMARY_KEY: self.primary_key.casefold()}
        for name, value in self.secondary_keys.items():
            if value:
                wanted[name] = value.casefold()
        return wanted


def _matches(row: Sequence, wanted: Dict[str, str]) -> bool:
    for name, value in wanted.items():
        if cell(row, COLUMN_BY_NAME[name].index).casefold() != value:
            return False
    return True


def active_fields(records: List[Dict[str, str]]) -> List[str]:
    """
    PURPOSE: Compute the fields that carry data anywhere in the result set.

    LOGIC:
      - Start from the always-shown fields
      - Add every field that is non-blank in at least one record

    RETURNS:
      list: Field names in schema order
    """
    present = set(ALWAYS_SHOWN)
    for record in records:
        for name, value in record.items():
            if value and value.strip():
                present.add(name)
    return [name for name in FIELD_NAMES if name in present]


def search(
    rows: Optional[Sequence[Sequence]],
    primary_key: str,
    secondary_keys: Optional[Mapping[str, Optional[str]]] = None,
) -> List[Dict[str, str]]:
    """
    PURPOSE: Filter rows by block number (and optional secondary keys), map
             them to records and prune empty columns across the whole set.

    ARGS:
      rows: Raw cell matrix from the row source
      primary_key (str): Block number (required, matched case-insensitively)
      secondary_keys (dict, optional): field name -> value; None/empty values
                                       impose no constraint

    RETURNS:
      list: Records in source order, each holding only the active fields

    RAISES:
      InvalidQuery: If the block number is missing
    """
    query = SearchQuery(primary_key, dict(secondary_keys or {}))
    wanted = query.constraints()

    # Pass 1: full records for every matching row
    records = [
        row_to_record(row)
        for row in rows or []
        if cell(row, 0) and _matches(row, wanted)
    ]

    # Pass 2: project onto the fields present somewhere in the set
    fields = active_fields(records)
    return [{name: record[name] for name in fields} for record in records]


def run_search(source, query: SearchQuery, range_id: str) -> List[Dict[str, str]]:
    """
    PURPOSE: Fetch rows for ``range_id`` from ``source`` and search them.

    ARGS:
      source: Row source exposing fetch_rows(range_id)
      query (SearchQuery): Already validated query
      range_id (str): A1 range of the data tab

    RETURNS:
      list: Search results

    RAISES:
      DataUnavailable: Propagated from the row source
    """
    log_msg(
        f"[SEARCH] blockNo={query.primary_key!r} "
        + " ".join(f"{k}={v!r}" for k, v in query.secondary_keys.items() if v)
    )
    rows = source.fetch_rows(range_id)
    results = search(rows, query.primary_key, query.secondary_keys)
    log_msg(f"[SEARCH] {len(rows)} rows scanned, {len(results)} matched")
    return results
