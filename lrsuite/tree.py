"""Parse trees produced by the shift-reduce parser."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ParseTreeNode:
    """A node labelled with a grammar symbol."""

    symbol: str
    children: list[ParseTreeNode] = field(default_factory=list)


@dataclass
class ParseTree:
    """A parse tree; empty when it has no root."""

    root: ParseTreeNode | None = None

    def to_text(self) -> str:
        """Render the tree with box-drawing branches, one node per line."""
        if self.root is None:
            return ""
        lines = [self.root.symbol]
        lines.extend(_render_children(self.root.children, ""))
        return "\n".join(lines) + "\n"


def _render_children(children: list[ParseTreeNode], prefix: str):
    for position, child in enumerate(children):
        last = position == len(children) - 1
        yield f"{prefix}{'└── ' if last else '├── '}{child.symbol}"
        yield from _render_children(child.children, prefix + ("    " if last else "│   "))