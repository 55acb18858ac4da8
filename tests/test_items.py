import pytest

from lrsuite.grammar import Grammar
from lrsuite.items import (
    CanonicalCollection,
    Item,
    ItemSet,
    ItemsBuilder,
    item_to_string,
)


@pytest.fixture
def grammar():
    g = Grammar.from_lines(["S -> C C", "C -> c C | d"])
    g.augment()
    g.compute_first()
    return g


@pytest.fixture
def builder(grammar):
    return ItemsBuilder(grammar)


def test_item_ordering_and_lr1_flag():
    items = [Item(2, 0, "b"), Item(1, 1), Item(1, 0, "x"), Item(2, 0, "a")]
    assert sorted(items) == [Item(1, 0, "x"), Item(1, 1), Item(2, 0, "a"), Item(2, 0, "b")]
    assert Item(0, 0, "$").is_lr1()
    assert not Item(0, 0).is_lr1()


def test_item_set_add_reports_novelty():
    s = ItemSet()
    assert s.add(Item(0, 0)) is True
    assert s.add(Item(0, 0)) is False
    assert len(s) == 1


def test_signature_independent_of_insertion_order():
    a = ItemSet(lr1=True, items=[Item(1, 0, "a"), Item(0, 0, "$")])
    b = ItemSet(lr1=True, items=[Item(0, 0, "$"), Item(1, 0, "a")])
    assert a.signature() == b.signature()
    assert a == b
    assert a.signature().startswith("LR1|")
    assert ItemSet(lr1=False).signature().startswith("LR0|")


def test_item_to_string(grammar):
    assert item_to_string(grammar, Item(0, 0)) == "SPrime -> \u00b7 S"
    text = item_to_string(grammar, Item(1, 2, "$"))
    assert text.endswith("\u00b7 , $")
    assert text.startswith("S -> C C")


def test_item_to_string_epsilon():
    g = Grammar.from_lines(["A -> @"])
    assert item_to_string(g, Item(0, 0)) == "A -> \u00b7 @"


def test_closure_lr0_contains_all_c_productions(builder, grammar):
    closure = builder.closure_lr0(ItemSet(items=[Item(0, 0)]))
    prods = {it.prod for it in closure}
    assert prods == set(range(len(grammar.productions)))
    assert all(it.dot == 0 for it in closure)


def test_closure_is_idempotent(builder):
    once = builder.closure_lr1(ItemSet(lr1=True, items=[Item(0, 0, "$")]))
    twice = builder.closure_lr1(once)
    assert once == twice


def test_closure_lr1_lookaheads_from_first(builder, grammar):
    closure = builder.closure_lr1(ItemSet(lr1=True, items=[Item(0, 0, "$")]))
    c_items = {it for it in closure if grammar.productions[it.prod].lhs == "C"}
    assert {it.lookahead for it in c_items} == grammar.first_sets["C"]


def test_goto_on_missing_symbol_is_empty(builder):
    start = builder.closure_lr0(ItemSet(items=[Item(0, 0)]))
    assert len(builder.goto_lr0(start, "zzz")) == 0
    assert len(builder.goto_lr1(builder.closure_lr1(ItemSet(True, [Item(0, 0, "$")])), "zzz")) == 0


def test_goto_advances_dot(builder):
    start = builder.closure_lr0(ItemSet(items=[Item(0, 0)]))
    moved = builder.goto_lr0(start, "S")
    assert moved.items == [Item(0, 1)]


def _check_collection(col: CanonicalCollection):
    assert len(col.states) == len(col.transitions)
    sigs = [s.signature() for s in col.states]
    assert len(set(sigs)) == len(sigs)
    for row in col.transitions:
        for target in row.values():
            assert 0 <= target < len(col.states)


def test_canonical_lr0(builder):
    col = builder.build_canonical_lr0()
    _check_collection(col)
    assert len(col.states) == 7
    assert Item(0, 0) in col.states[0]


def test_canonical_lr1(builder):
    col = builder.build_canonical_lr1()
    _check_collection(col)
    assert len(col.states) == 10
    assert all(it.is_lr1() for state in col.states for it in state)


def test_lr1_not_fewer_states_than_lr0(builder):
    assert len(builder.build_canonical_lr1().states) >= len(builder.build_canonical_lr0().states)


def test_end_marker_not_used_for_transitions(builder):
    col = builder.build_canonical_lr1()
    assert all("$" not in row for row in col.transitions)