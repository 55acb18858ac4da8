import pytest

from lrsuite.parsing_table import (
    Action,
    ActionType,
    Conflict,
    ParsingTable,
    action_to_string,
)


def test_action_to_string():
    assert action_to_string(Action(ActionType.SHIFT, 3)) == "s3"
    assert action_to_string(Action(ActionType.REDUCE, 12)) == "r12"
    assert action_to_string(Action(ActionType.ACCEPT)) == "acc"


def test_set_and_get_action():
    table = ParsingTable()
    assert table.set_action(0, "a", Action(ActionType.SHIFT, 2)) is None
    assert table.get_action(0, "a") == Action(ActionType.SHIFT, 2)
    assert table.get_action(0, "b") is None
    assert table.get_action(1, "a") is None


def test_same_action_twice_is_not_a_conflict():
    table = ParsingTable()
    table.set_action(0, "a", Action(ActionType.REDUCE, 1))
    assert table.set_action(0, "a", Action(ActionType.REDUCE, 1)) is None
    assert table.conflicts == []


def test_conflict_is_recorded_and_first_wins():
    table = ParsingTable()
    shift = Action(ActionType.SHIFT, 1)
    reduce = Action(ActionType.REDUCE, 2)
    table.set_action(0, "a", shift)
    conflict = table.set_action(0, "a", reduce)
    assert conflict == Conflict(0, "a", shift, reduce)
    assert table.conflicts == [conflict]
    assert table.get_action(0, "a") == shift


def test_goto():
    table = ParsingTable()
    table.set_goto(0, "E", 4)
    table.set_goto(0, "E", 5)
    assert table.get_goto(0, "E") == 5
    assert table.get_goto(0, "T") is None
    assert table.goto_entry_count() == 1


def test_columns_sorted_and_counts():
    table = ParsingTable()
    table.set_action(1, "z", Action(ActionType.SHIFT, 2))
    table.set_action(0, "a", Action(ActionType.SHIFT, 3))
    table.set_action(2, "a", Action(ActionType.ACCEPT))
    table.set_goto(0, "T", 1)
    table.set_goto(0, "E", 2)
    assert table.action_columns() == ["a", "z"]
    assert table.goto_columns() == ["E", "T"]
    assert table.action_entry_count() == 3
    assert table.total_entry_count() == table.action_entry_count() + table.goto_entry_count()


def test_approx_bytes_grows_with_entries():
    table = ParsingTable()
    assert table.approx_bytes() == 0
    table.set_goto(0, "E", 1)
    after_goto = table.approx_bytes()
    table.set_action(0, "a", Action(ActionType.SHIFT, 1))
    assert 0 < after_goto < table.approx_bytes()


def test_to_text_empty_table():
    text = ParsingTable().to_text()
    assert "(no ACTION)" in text
    assert "(no GOTO)" in text
    assert "CONFLICTS" not in text


@pytest.fixture
def filled():
    table = ParsingTable()
    table.set_action(1, "id", Action(ActionType.SHIFT, 5))
    table.set_action(0, "id", Action(ActionType.SHIFT, 3))
    table.set_action(0, "$", Action(ActionType.ACCEPT))
    table.set_goto(0, "E", 1)
    return table


def test_to_text_rows(filled):
    lines = filled.to_text().splitlines()
    assert lines[0].startswith("State")
    assert "ACTION" in lines[0] and "GOTO" in lines[0]
    rows = lines[3:]
    assert [r.split()[0] for r in rows] == ["I0", "I1"]
    assert len({len(lines[1]), *map(len, rows)}) == 1
    assert "acc" in rows[0] and "s3" in rows[0]
    assert "s5" in rows[1]


def test_to_text_lists_conflicts(filled):
    filled.set_action(0, "id", Action(ActionType.REDUCE, 2))
    text = filled.to_text()
    assert "\nCONFLICTS:\n" in text
    assert text.endswith("State I0, on terminal 'id': s3 vs r2\n")


def test_to_text_wide_column_name():
    table = ParsingTable()
    table.set_action(0, "identifier", Action(ActionType.SHIFT, 1))
    header = table.to_text().splitlines()[1]
    assert "identifier" in header
    row = table.to_text().splitlines()[3]
    assert len(row) == len(header)