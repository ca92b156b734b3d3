import pytest

from core.errors import InvalidQuery
from core.schema import FIELD_NAMES
from core.search import SearchQuery, active_fields, run_search, search


def test_empty_source_returns_empty_list():
    assert search([], "B1") == []
    assert search(None, "B1") == []


def test_no_match_returns_empty_list():
    rows = [["B1", "P1", "10"]]
    assert search(rows, "ZZ") == []


def test_rows_without_block_number_are_skipped():
    rows = [["", "P1", "10", "X"], ["B1", "P2"], [], [None, "P3"]]
    results = search(rows, "b1")
    assert [r["partNo"] for r in results] == ["P2"]


def test_empty_query_never_matches_blank_rows():
    with pytest.raises(InvalidQuery):
        search([["", "P1"]], "")


def test_matching_is_case_insensitive_and_emits_source_casing():
    rows = [["a1", "p1", "10"]]
    results = search(rows, "A1", {"partNo": "P1"})
    assert results == [{"blockNo": "a1", "partNo": "p1", "thickness": "10"}]


def test_scenario_two_rows_share_active_fields():
    rows = [["B1", "P1", "10", "", "G"], ["B1", "P2", "10", "N", ""]]
    results = search(rows, "b1")

    assert results == [
        {"blockNo": "B1", "partNo": "P1", "thickness": "10", "nos": "", "grinding": "G"},
        {"blockNo": "B1", "partNo": "P2", "thickness": "10", "nos": "N", "grinding": ""},
    ]


def test_fields_empty_everywhere_are_dropped_not_blanked():
    rows = [["B1", "P1", "10", "", "G"], ["B1", "P2"]]
    results = search(rows, "B1")

    for record in results:
        assert "nos" not in record
        assert "color2" not in record
        assert set(record) == {"blockNo", "partNo", "thickness", "grinding"}


def test_whitespace_only_cells_do_not_activate_a_field():
    rows = [["B1", "P1", "10", "   "]]
    assert "nos" not in search(rows, "B1")[0]


def test_mandatory_fields_present_even_when_blank():
    rows = [["B1"]]
    assert search(rows, "B1") == [{"blockNo": "B1", "partNo": "", "thickness": ""}]


def test_pruning_only_considers_matching_rows():
    rows = [["B1", "P1", "10"], ["B2", "P1", "10", "N"]]
    assert "nos" not in search(rows, "B1")[0]


def test_secondary_key_with_no_match_returns_empty():
    rows = [["B1", "P1", "10"], ["B1", "P2", "12"]]
    assert search(rows, "B1", {"partNo": "P7"}) == []


def test_empty_or_none_secondary_keys_impose_no_constraint():
    rows = [["B1", "P1", "10"], ["B1", "P2", "12"]]
    assert len(search(rows, "B1", {"partNo": None, "thickness": ""})) == 2


def test_thickness_and_part_filters_combine():
    rows = [["B1", "P1", "10"], ["B1", "P1", "12"], ["B1", "P2", "12"]]
    results = search(rows, "B1", {"partNo": "p1", "thickness": "12"})
    assert results == [{"blockNo": "B1", "partNo": "P1", "thickness": "12"}]


def test_order_is_preserved():
    rows = [["B1", "P3"], ["B2", "P1"], ["B1", "P1"], ["B1", "P2"]]
    assert [r["partNo"] for r in search(rows, "B1")] == ["P3", "P1", "P2"]


def test_missing_cells_become_empty_strings():
    full = ["B1"] + [""] * 21 + ["Blue"]
    results = search([full, ["B1", "P2"]], "B1")
    assert results[1]["color2"] == ""
    assert all(isinstance(v, str) for r in results for v in r.values())


def test_non_string_cells_are_stringified():
    results = search([["B1", 7, 10.5]], "B1")
    assert results == [{"blockNo": "B1", "partNo": "7", "thickness": "10.5"}]


def test_unknown_secondary_field_is_rejected():
    with pytest.raises(InvalidQuery):
        search([["B1"]], "B1", {"colour": "red"})


def test_active_fields_follow_schema_order():
    records = [dict.fromkeys(FIELD_NAMES, "") for _ in range(2)]
    records[0]["color1"] = "Red"
    records[1]["nos"] = "3"
    assert active_fields(records) == ["blockNo", "partNo", "thickness", "nos", "color1"]


def test_query_from_params_requires_block_number():
    with pytest.raises(InvalidQuery) as exc:
        SearchQuery.from_params({"partNo": "P1"})
    assert exc.value.status_code == 400

    with pytest.raises(InvalidQuery):
        SearchQuery.from_params(None)


def test_query_from_params_maps_secondary_keys():
    query = SearchQuery.from_params({"blockNo": "B1", "thickness": "10", "other": "x"})
    assert query.primary_key == "B1"
    assert query.secondary_keys == {"partNo": None, "thickness": "10"}


def test_run_search_fetches_configured_range(sheets, spreadsheet):
    query = SearchQuery.from_params({"blockNo": "b1"})
    results = run_search(sheets, query, "Data!A2:W")

    assert spreadsheet.reads == ["Data!A2:W"]
    assert [r["partNo"] for r in results] == ["P1", "P2", "P3"]
    assert set(results[0]) == {"blockNo", "partNo", "thickness", "nos", "grinding"}
