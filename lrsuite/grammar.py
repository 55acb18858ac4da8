"""Context-free grammars: parsing, augmentation and FIRST/FOLLOW sets."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

EPSILON = "@"
END_MARKER = "$"

_EPSILON_WORDS = frozenset({EPSILON, "epsilon"})
_WHITESPACE = " \t\n\r\f\v"


class GrammarError(ValueError):
    """Raised when a grammar cannot be read or is malformed."""


@dataclass(frozen=True)
class Production:
    """A single production; an epsilon production has an empty right-hand side."""

    lhs: str
    rhs: tuple[str, ...] = ()


def _starts_with_upper(symbol: str) -> bool:
    return bool(symbol) and symbol[0].isascii() and symbol[0].isupper()


class Grammar:
    """A grammar read from ``A -> alt1 | alt2`` lines, one nonterminal per line."""

    EPSILON = EPSILON
    END_MARKER = END_MARKER

    def __init__(self, productions: Iterable[Production], start_symbol: str) -> None:
        self.productions: list[Production] = list(productions)
        if not self.productions:
            raise GrammarError("No productions found in grammar.")
        self.start_symbol = start_symbol
        self.augmented_start_symbol: str | None = None
        self.prods_by_lhs: dict[str, list[int]] = {}
        self.nonterminals: set[str] = set()
        self.terminals: set[str] = set()
        self.first_sets: dict[str, set[str]] = {}
        self.follow_sets: dict[str, set[str]] = {}
        self._reindex()
        self._infer_symbols()

    @classmethod
    def from_file(cls, path: str | Path) -> Grammar:
        """Read a grammar from a text file."""
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise GrammarError(f"Failed to open grammar file: {path}") from exc
        return cls.from_text(text)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> Grammar:
        """Read a grammar from a sequence of lines."""
        return cls.from_text("".join(f"{line}\n" for line in lines))

    @classmethod
    def from_text(cls, text: str) -> Grammar:
        """Read a grammar from its textual form."""
        productions: list[Production] = []
        start: str | None = None

        for raw in text.splitlines():
            line = raw.strip(_WHITESPACE)
            if not line or line.startswith("//"):
                continue
            lhs_part, arrow, rhs_part = line.partition("->")
            if not arrow:
                raise GrammarError(f"Invalid production line (missing ->): {line}")
            lhs = lhs_part.strip(_WHITESPACE)
            rhs_all = rhs_part.strip(_WHITESPACE)
            if not lhs or not rhs_all:
                raise GrammarError(f"Invalid production line: {line}")
            if not _starts_with_upper(lhs):
                raise GrammarError(f"NonTerminal must start with uppercase: {lhs}")
            if start is None:
                start = lhs

            for alt in rhs_all.split("|"):
                symbols = alt.split()
                # An explicit epsilon anywhere in an alternative makes it empty.
                if any(sym in _EPSILON_WORDS for sym in symbols):
                    symbols = []
                productions.append(Production(lhs, tuple(symbols)))

        if not productions or start is None:
            raise GrammarError("No productions found in grammar.")
        return cls(productions, start)

    def augment(self) -> None:
        """Add ``S' -> S`` as production 0; does nothing if already augmented."""
        if self.augmented_start_symbol is not None:
            return
        if not self.start_symbol:
            raise GrammarError("Cannot augment grammar without a start symbol.")

        name = self.start_symbol + "Prime"
        while name in self.nonterminals:
            name += "Prime"
        self.augmented_start_symbol = name
        self.productions.insert(0, Production(name, (self.start_symbol,)))
        self._reindex()
        self._infer_symbols()

    def is_nonterminal(self, symbol: str) -> bool:
        return symbol in self.nonterminals

    def is_terminal(self, symbol: str) -> bool:
        return symbol != EPSILON and symbol in self.terminals

    def compute_first(self) -> None:
        """Compute FIRST sets for every symbol."""
        first: dict[str, set[str]] = {t: {t} for t in self.terminals}
        first[EPSILON] = {EPSILON}
        for nt in self.nonterminals:
            first.setdefault(nt, set())
        self.first_sets = first

        changed = True
        while changed:
            changed = False
            for prod in self.productions:
                target = first[prod.lhs]
                before = len(target)
                target |= self.first_of_sequence(prod.rhs)
                if len(target) != before:
                    changed = True

    def first_of_sequence(self, symbols: Sequence[str]) -> set[str]:
        """FIRST of a symbol sequence; contains ``@`` if it can derive epsilon."""
        result: set[str] = set()
        for sym in symbols:
            sym_first = self.first_sets.get(sym)
            if sym_first is None:
                # Unknown symbols behave as terminals.
                result.add(sym)
                return result
            result |= sym_first - {EPSILON}
            if EPSILON not in sym_first:
                return result
        result.add(EPSILON)
        return result

    def compute_follow(self) -> None:
        """Compute FOLLOW sets for every nonterminal."""
        if not self.first_sets:
            self.compute_first()
        follow: dict[str, set[str]] = {nt: set() for nt in self.nonterminals}
        follow.setdefault(self.start_symbol, set()).add(END_MARKER)
        self.follow_sets = follow

        changed = True
        while changed:
            changed = False
            for prod in self.productions:
                for pos, sym in enumerate(prod.rhs):
                    if not self.is_nonterminal(sym):
                        continue
                    beta = prod.rhs[pos + 1:]
                    first_beta = self.first_of_sequence(beta)
                    target = follow[sym]
                    before = len(target)
                    target |= first_beta - {EPSILON}
                    if EPSILON in first_beta:
                        target |= follow[prod.lhs]
                    if len(target) != before:
                        changed = True

    def to_text(self) -> str:
        """Render the start symbol(s) and numbered productions."""
        lines = [f"Start: {self.start_symbol}"]
        if self.augmented_start_symbol is not None:
            lines.append(f"AugmentedStart: {self.augmented_start_symbol}")
        for index, prod in enumerate(self.productions):
            rhs = " ".join(prod.rhs) if prod.rhs else EPSILON
            lines.append(f"{index}: {prod.lhs} -> {rhs}")
        return "\n".join(lines) + "\n"

    def _reindex(self) -> None:
        by_lhs: dict[str, list[int]] = {}
        for index, prod in enumerate(self.productions):
            by_lhs.setdefault(prod.lhs, []).append(index)
        self.prods_by_lhs = by_lhs

    def _infer_symbols(self) -> None:
        self.nonterminals = {prod.lhs for prod in self.productions}
        self.terminals = set()
        for prod in self.productions:
            for sym in prod.rhs:
                if _starts_with_upper(sym):
                    self.nonterminals.add(sym)
                else:
                    self.terminals.add(sym)
        self.terminals.add(END_MARKER)