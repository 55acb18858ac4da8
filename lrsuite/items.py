"""LR(0) and LR(1) items, closure/goto, and canonical collections."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from lrsuite.grammar import END_MARKER, EPSILON, Grammar

DOT = "\u00b7"


@dataclass(frozen=True, order=True)
class Item:
    """An item: production index, dot position and optional lookahead.

    An empty lookahead marks an LR(0) item.
    """

    prod: int
    dot: int = 0
    lookahead: str = ""

    def is_lr1(self) -> bool:
        return bool(self.lookahead)


class ItemSet:
    """A set of items kept in sorted order for deterministic output."""

    def __init__(self, lr1: bool = False, items: Iterable[Item] = ()) -> None:
        self.lr1 = lr1
        self._items: set[Item] = set(items)

    @property
    def items(self) -> list[Item]:
        """The items in ascending order."""
        return sorted(self._items)

    def add(self, item: Item) -> bool:
        """Add an item; return True if it was not already present."""
        if item in self._items:
            return False
        self._items.add(item)
        return True

    def signature(self) -> str:
        """A string that identifies the set's kind and contents."""
        body = "".join(f"{it.prod}:{it.dot}:{it.lookahead};" for it in self.items)
        return ("LR1|" if self.lr1 else "LR0|") + body

    def __iter__(self) -> Iterator[Item]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ItemSet):
            return NotImplemented
        return self.lr1 == other.lr1 and self._items == other._items

    def __lt__(self, other: ItemSet) -> bool:
        return self.signature() < other.signature()

    def __hash__(self) -> int:
        return hash(self.signature())

    def __repr__(self) -> str:
        return f"ItemSet(lr1={self.lr1}, items={self.items!r})"


@dataclass
class CanonicalCollection:
    """States of an LR automaton and ``transitions[state][symbol] -> state``."""

    states: list[ItemSet] = field(default_factory=list)
    transitions: list[dict[str, int]] = field(default_factory=list)


def item_to_string(grammar: Grammar, item: Item) -> str:
    """Render an item as ``A -> x · y`` with an optional ``, lookahead``."""
    prod = grammar.productions[item.prod]
    parts = [f"{prod.lhs} ->"]
    if not prod.rhs:
        parts.append(f"{DOT} {EPSILON}")
    else:
        for pos in range(len(prod.rhs) + 1):
            if pos == item.dot:
                parts.append(DOT)
            if pos < len(prod.rhs):
                parts.append(prod.rhs[pos])
    text = " ".join(parts)
    if item.lookahead:
        text += f" , {item.lookahead}"
    return text


class ItemsBuilder:
    """Closure, goto and canonical collection construction for a grammar."""

    def __init__(self, grammar: Grammar) -> None:
        if not grammar.productions:
            raise ValueError("ItemsBuilder requires a non-empty grammar.")
        self.grammar = grammar

    def _goto_symbols(self) -> list[str]:
        terminals = sorted(t for t in self.grammar.terminals if t != END_MARKER)
        return terminals + sorted(self.grammar.nonterminals)

    def _symbol_after_dot(self, item: Item) -> str | None:
        rhs = self.grammar.productions[item.prod].rhs
        return rhs[item.dot] if item.dot < len(rhs) else None

    def closure_lr0(self, item_set: ItemSet) -> ItemSet:
        result = ItemSet(lr1=False)
        queue = deque(it for it in item_set if result.add(it))
        while queue:
            current = queue.popleft()
            symbol = self._symbol_after_dot(current)
            if symbol is None or not self.grammar.is_nonterminal(symbol):
                continue
            for index in self.grammar.prods_by_lhs.get(symbol, ()):
                new_item = Item(index, 0, "")
                if result.add(new_item):
                    queue.append(new_item)
        return result

    def _advance(self, item_set: ItemSet, symbol: str, lr1: bool) -> ItemSet:
        moved = ItemSet(lr1=lr1)
        for it in item_set:
            if self._symbol_after_dot(it) == symbol:
                moved.add(Item(it.prod, it.dot + 1, it.lookahead))
        return moved

    def goto_lr0(self, item_set: ItemSet, symbol: str) -> ItemSet:
        moved = self._advance(item_set, symbol, lr1=False)
        return self.closure_lr0(moved) if len(moved) else moved

    def closure_lr1(self, item_set: ItemSet) -> ItemSet:
        """For each ``[A -> α · B β, a]`` add ``[B -> · γ, b]`` for b in FIRST(β a)."""
        result = ItemSet(lr1=True)
        queue = deque(it for it in item_set if result.add(it))
        while queue:
            current = queue.popleft()
            symbol = self._symbol_after_dot(current)
            if symbol is None or not self.grammar.is_nonterminal(symbol):
                continue
            rhs = self.grammar.productions[current.prod].rhs
            beta_a = [*rhs[current.dot + 1:], current.lookahead]
            first = sorted(self.grammar.first_of_sequence(beta_a) - {EPSILON})
            for index in self.grammar.prods_by_lhs.get(symbol, ()):
                for lookahead in first:
                    new_item = Item(index, 0, lookahead)
                    if result.add(new_item):
                        queue.append(new_item)
        return result

    def goto_lr1(self, item_set: ItemSet, symbol: str) -> ItemSet:
        moved = self._advance(item_set, symbol, lr1=True)
        return self.closure_lr1(moved) if len(moved) else moved

    def _build(self, initial: ItemSet, goto) -> CanonicalCollection:
        collection = CanonicalCollection([initial], [{}])
        by_signature = {initial.signature(): 0}
        queue = deque([0])
        symbols = self._goto_symbols()
        while queue:
            state = queue.popleft()
            for symbol in symbols:
                target = goto(collection.states[state], symbol)
                if not len(target):
                    continue
                sig = target.signature()
                index = by_signature.get(sig)
                if index is None:
                    index = len(collection.states)
                    by_signature[sig] = index
                    collection.states.append(target)
                    collection.transitions.append({})
                    queue.append(index)
                collection.transitions[state][symbol] = index
        return collection

    def build_canonical_lr0(self) -> CanonicalCollection:
        """Build the LR(0) collection; production 0 must be the augmented start."""
        initial = self.closure_lr0(ItemSet(lr1=False, items=[Item(0, 0, "")]))
        return self._build(initial, self.goto_lr0)

    def build_canonical_lr1(self) -> CanonicalCollection:
        """Build the LR(1) collection; FIRST sets must already be computed."""
        initial = self.closure_lr1(ItemSet(lr1=True, items=[Item(0, 0, END_MARKER)]))
        return self._build(initial, self.goto_lr1)