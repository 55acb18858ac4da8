"""ACTION/GOTO parsing tables with conflict recording."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# Rough per-entry sizes used by approx_bytes: an action is two ints, a goto one.
_ACTION_BYTES = 8
_GOTO_BYTES = 4

_STATE_WIDTH = 7
_MIN_CELL_WIDTH = 5
_MAX_CELL_WIDTH = 16


class ActionType(Enum):
    SHIFT = "shift"
    REDUCE = "reduce"
    ACCEPT = "accept"


@dataclass(frozen=True)
class Action:
    """A table action: target is the next state for shift, production for reduce."""

    type: ActionType
    target: int = -1


@dataclass(frozen=True)
class Conflict:
    state: int
    terminal: str
    existing: Action
    incoming: Action


def action_to_string(action: Action) -> str:
    """Render an action as ``sN``, ``rN`` or ``acc``."""
    if action.type is ActionType.SHIFT:
        return f"s{action.target}"
    if action.type is ActionType.REDUCE:
        return f"r{action.target}"
    return "acc"


@dataclass
class ParsingTable:
    """ACTION and GOTO entries keyed by (state, symbol)."""

    action: dict[tuple[int, str], Action] = field(default_factory=dict)
    goto: dict[tuple[int, str], int] = field(default_factory=dict)
    conflicts: list[Conflict] = field(default_factory=list)

    def set_action(self, state: int, terminal: str, action: Action) -> Conflict | None:
        """Set an action; the first entry wins and a differing one is recorded as a conflict.

        Returns the conflict, or None when the entry was set or already equal.
        """
        key = (state, terminal)
        existing = self.action.get(key)
        if existing is None:
            self.action[key] = action
            return None
        if existing == action:
            return None
        conflict = Conflict(state, terminal, existing, action)
        self.conflicts.append(conflict)
        return conflict

    def set_goto(self, state: int, nonterminal: str, next_state: int) -> None:
        self.goto[(state, nonterminal)] = next_state

    def get_action(self, state: int, terminal: str) -> Action | None:
        return self.action.get((state, terminal))

    def get_goto(self, state: int, nonterminal: str) -> int | None:
        return self.goto.get((state, nonterminal))

    def action_columns(self) -> list[str]:
        return sorted({terminal for _, terminal in self.action})

    def goto_columns(self) -> list[str]:
        return sorted({nonterminal for _, nonterminal in self.goto})

    def action_entry_count(self) -> int:
        return len(self.action)

    def goto_entry_count(self) -> int:
        return len(self.goto)

    def total_entry_count(self) -> int:
        return len(self.action) + len(self.goto)

    def approx_bytes(self) -> int:
        """A rough size estimate that ignores container overhead."""
        return len(self.action) * _ACTION_BYTES + len(self.goto) * _GOTO_BYTES

    def to_text(self) -> str:
        """Render the table as aligned text, followed by any conflicts."""
        a_cols = self.action_columns()
        g_cols = self.goto_columns()
        states = sorted({s for s, _ in self.action} | {s for s, _ in self.goto})

        cells = [action_to_string(a) for a in self.action.values()]
        cells += [str(g) for g in self.goto.values()]
        width = max([_MIN_CELL_WIDTH, *map(len, a_cols), *map(len, g_cols), *map(len, cells)])
        width = min(width, _MAX_CELL_WIDTH)

        def section(values: list[str]) -> str:
            if not values:
                return "".ljust(width)
            return " | ".join(v.ljust(width) for v in values)

        def group_title(cols: list[str], title: str, empty: str) -> str:
            if not cols:
                return empty.ljust(width)
            return title.ljust((width + 3) * len(cols) - 3)

        def dashes(cols: list[str]) -> str:
            return "-" * ((width + 3) * len(cols) + (1 if cols else 0))

        lines = [
            "State".ljust(_STATE_WIDTH)
            + " | "
            + group_title(a_cols, "ACTION", "(no ACTION)")
            + " | "
            + group_title(g_cols, "GOTO", "(no GOTO)"),
            "".ljust(_STATE_WIDTH) + " | " + section(a_cols) + " | " + section(g_cols),
            "-" * _STATE_WIDTH + "-+-" + dashes(a_cols) + "-+-" + dashes(g_cols),
        ]

        for state in states:
            a_cells = []
            for terminal in a_cols:
                act = self.get_action(state, terminal)
                a_cells.append(action_to_string(act) if act is not None else "")
            g_cells = []
            for nonterminal in g_cols:
                target = self.get_goto(state, nonterminal)
                g_cells.append(str(target) if target is not None else "")
            lines.append(
                f"I{state}".ljust(_STATE_WIDTH) + " | " + section(a_cells) + " | " + section(g_cells)
            )

        text = "\n".join(lines) + "\n"
        if self.conflicts:
            text += "\nCONFLICTS:\n"
            for c in self.conflicts:
                text += (
                    f"State I{c.state}, on terminal '{c.terminal}': "
                    f"{action_to_string(c.existing)} vs {action_to_string(c.incoming)}\n"
                )
        return text