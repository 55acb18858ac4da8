"""Table-driven shift-reduce parsing with a step-by-step trace."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from lrsuite.grammar import END_MARKER, EPSILON, Grammar
from lrsuite.parsing_table import ActionType, ParsingTable
from lrsuite.tree import ParseTree, ParseTreeNode


class ParserStackError(RuntimeError):
    """Raised when a reduction needs more stack entries than there are."""


@dataclass
class TraceRow:
    step: int
    stack: str
    input: str
    action: str = ""


@dataclass
class ParseResult:
    accepted: bool = False
    trace: list[TraceRow] = field(default_factory=list)
    tree: ParseTree = field(default_factory=ParseTree)
    error: str = ""


class ShiftReduceParser:
    """Runs the ACTION/GOTO tables built by the SLR(1) or LR(1) builders."""

    def __init__(self, grammar: Grammar, table: ParsingTable) -> None:
        self.grammar = grammar
        self.table = table

    def parse(self, tokens: Sequence[str]) -> ParseResult:
        """Parse tokens; the end marker is appended automatically."""
        result = ParseResult()
        remaining = [*tokens, END_MARKER]
        states = [0]
        symbols: list[str] = []
        nodes: list[ParseTreeNode] = []
        pos = 0
        step = 1

        while True:
            state = states[-1]
            lookahead = remaining[pos] if pos < len(remaining) else END_MARKER
            stack_text = " ".join(
                [str(states[0]), *(f"{sym} {st}" for sym, st in zip(symbols, states[1:]))]
            )
            row = TraceRow(step, stack_text, " ".join(remaining[pos:]))
            step += 1
            result.trace.append(row)

            action = self.table.get_action(state, lookahead)
            if action is None:
                row.action = "error"
                result.error = f"No ACTION for state {state} on terminal '{lookahead}'"
                return result

            if action.type is ActionType.SHIFT:
                row.action = f"shift {action.target}"
                symbols.append(lookahead)
                states.append(action.target)
                nodes.append(ParseTreeNode(lookahead))
                pos += 1
                continue

            if action.type is ActionType.REDUCE:
                prod = self.grammar.productions[action.target]
                rhs_text = " ".join(prod.rhs) if prod.rhs else EPSILON
                row.action = f"reduce {prod.lhs} -> {rhs_text}"

                count = len(prod.rhs)
                if len(states) - 1 < count or len(symbols) < count or len(nodes) < count:
                    raise ParserStackError("Parser stack underflow during reduction.")
                cut = len(nodes) - count
                children = nodes[cut:]
                del nodes[cut:]
                del symbols[len(symbols) - count:]
                del states[len(states) - count:]
                parent = ParseTreeNode(prod.lhs, children)

                top = states[-1]
                target = self.table.get_goto(top, prod.lhs)
                if target is None:
                    row.action += " (error: missing GOTO)"
                    result.error = f"No GOTO for state {top} on nonterminal '{prod.lhs}'"
                    return result

                symbols.append(prod.lhs)
                states.append(target)
                nodes.append(parent)
                continue

            row.action = "accept"
            result.accepted = True
            if nodes:
                result.tree = ParseTree(nodes[-1])
            return result