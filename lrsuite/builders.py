"""SLR(1) and canonical LR(1) parsing table construction."""

from __future__ import annotations

from dataclasses import dataclass, field

from lrsuite.grammar import END_MARKER, Grammar, Production
from lrsuite.items import CanonicalCollection, Item, ItemSet, ItemsBuilder
from lrsuite.parsing_table import Action, ActionType, ParsingTable


@dataclass
class ParserBuildResult:
    """The automaton a table was built from, and the table itself."""

    collection: CanonicalCollection = field(default_factory=CanonicalCollection)
    table: ParsingTable = field(default_factory=ParsingTable)


def _is_accept_production(grammar: Grammar, prod: Production) -> bool:
    return (
        grammar.augmented_start_symbol is not None
        and prod.lhs == grammar.augmented_start_symbol
        and prod.rhs == (grammar.start_symbol,)
    )


def _add_transitions(
    grammar: Grammar, table: ParsingTable, state: int, transitions: dict[str, int]
) -> None:
    """Shift on terminal transitions, GOTO on nonterminal ones."""
    for symbol in sorted(transitions):
        target = transitions[symbol]
        if grammar.is_terminal(symbol) and symbol != END_MARKER:
            table.set_action(state, symbol, Action(ActionType.SHIFT, target))
        elif grammar.is_nonterminal(symbol):
            table.set_goto(state, symbol, target)


def _completed_items(grammar: Grammar, item_set: ItemSet):
    for item in item_set:
        prod = grammar.productions[item.prod]
        if item.dot >= len(prod.rhs):
            yield item, prod


class SLRParserBuilder:
    """Builds an SLR(1) table: LR(0) states, reductions on FOLLOW sets.

    The grammar is expected to be augmented already.
    """

    def __init__(self, grammar: Grammar) -> None:
        self.grammar = grammar

    def build(self) -> ParserBuildResult:
        grammar = self.grammar
        collection = ItemsBuilder(grammar).build_canonical_lr0()
        grammar.compute_first()
        grammar.compute_follow()

        table = ParsingTable()
        for state, item_set in enumerate(collection.states):
            _add_transitions(grammar, table, state, collection.transitions[state])
            for item, prod in _completed_items(grammar, item_set):
                if _is_accept_production(grammar, prod):
                    table.set_action(state, END_MARKER, Action(ActionType.ACCEPT))
                    continue
                follow = grammar.follow_sets.get(prod.lhs)
                if follow is None:
                    continue
                for terminal in sorted(follow):
                    table.set_action(state, terminal, Action(ActionType.REDUCE, item.prod))
        return ParserBuildResult(collection, table)


class LR1ParserBuilder:
    """Builds a canonical LR(1) table: reductions only on item lookaheads.

    The grammar is expected to be augmented already.
    """

    def __init__(self, grammar: Grammar) -> None:
        self.grammar = grammar

    def build(self) -> ParserBuildResult:
        grammar = self.grammar
        grammar.compute_first()
        collection = ItemsBuilder(grammar).build_canonical_lr1()

        table = ParsingTable()
        for state, item_set in enumerate(collection.states):
            _add_transitions(grammar, table, state, collection.transitions[state])
            for item, prod in _completed_items(grammar, item_set):
                if _is_accept_production(grammar, prod) and item.lookahead == END_MARKER:
                    table.set_action(state, END_MARKER, Action(ActionType.ACCEPT))
                    continue
                if item.lookahead:
                    table.set_action(
                        state, item.lookahead, Action(ActionType.REDUCE, item.prod)
                    )
        return ParserBuildResult(collection, table)


__all__ = ["Item", "LR1ParserBuilder", "ParserBuildResult", "SLRParserBuilder"]