"""Command-line driver: build SLR(1) and LR(1) tables, parse tokens, write reports."""

from __future__ import annotations

import sys
import time
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from lrsuite.builders import LR1ParserBuilder, ParserBuildResult, SLRParserBuilder
from lrsuite.grammar import Grammar
from lrsuite.items import CanonicalCollection, item_to_string
from lrsuite.shift_reduce import ShiftReduceParser, TraceRow

DEFAULT_GRAMMAR = "input/grammar_with_conflict.txt"
DEFAULT_TOKENS = "id = id"
DEFAULT_OUTDIR = "output"
PARSE_ITERATIONS = 300

USAGE = (
    "Usage:\n"
    '  lrsuite --grammar input/<file>.txt --tokens "tok1 tok2 ..." [--outdir output]\n'
    "\n"
    "Notes:\n"
    "- Tokens must be space-separated (e.g. \"id = id\"). '$' is appended automatically.\n"
    "- Outputs written: augmented grammar, item sets, parsing tables, traces, parse tree.\n"
)

_VALUE_FLAGS = ("--grammar", "--tokens", "--outdir")


class _UsageError(ValueError):
    """Raised for malformed command-line arguments."""


@dataclass
class PerfRow:
    """Size and timing figures for one parser kind."""

    states: int = 0
    conflicts: int = 0
    action_entries: int = 0
    goto_entries: int = 0
    approx_bytes: int = 0
    build_ms: float = 0.0
    parse_ms: float = 0.0
    parse_iters: float = 0.0


def item_sets_to_string(grammar: Grammar, collection: CanonicalCollection) -> str:
    """Render every state of a canonical collection with its items."""
    blocks = []
    for index, state in enumerate(collection.states):
        lines = [f"I{index}:"]
        lines.extend(f"  {item_to_string(grammar, item)}" for item in state)
        blocks.append("\n".join(lines) + "\n\n")
    return "".join(blocks)


def _truncate(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    if max_len <= 3:
        return text[:max_len]
    return text[: max_len - 3] + "..."


def trace_to_string(trace: Sequence[TraceRow]) -> str:
    """Render a parse trace as an aligned four-column table."""
    step_w, stack_w, input_w, action_w = 4, 40, 28, 28
    for row in trace:
        step_w = max(step_w, len(str(row.step)))
        stack_w = max(stack_w, min(80, len(row.stack)))
        input_w = max(input_w, min(60, len(row.input)))
        action_w = max(action_w, min(60, len(row.action)))
    stack_w = min(stack_w, 80)
    input_w = min(input_w, 60)
    action_w = min(action_w, 60)

    lines = [
        " | ".join(
            [
                "Step".ljust(step_w),
                "Stack".ljust(stack_w),
                "Input".ljust(input_w),
                "Action".ljust(action_w),
            ]
        ),
        "-+-".join("-" * w for w in (step_w, stack_w, input_w, action_w)),
    ]
    for row in trace:
        lines.append(
            " | ".join(
                [
                    str(row.step).ljust(step_w),
                    _truncate(row.stack, stack_w).ljust(stack_w),
                    _truncate(row.input, input_w).ljust(input_w),
                    _truncate(row.action, action_w).ljust(action_w),
                ]
            )
        )
    return "\n".join(lines) + "\n"


def format_build_comparison(slr: ParserBuildResult, lr1: ParserBuildResult) -> str:
    """A short table of state and conflict counts for both builds."""
    metric_w, col_w = 18, 10

    def row(label: str, a: object, b: object) -> str:
        return f"{label.ljust(metric_w)} | {str(a).ljust(col_w)} | {str(b).ljust(col_w)}\n"

    return (
        row("Metric", "SLR(1)", "LR(1)")
        + "-" * metric_w + "-+-" + "-" * col_w + "-+-" + "-" * col_w + "\n"
        + row("States", len(slr.collection.states), len(lr1.collection.states))
        + row("Conflicts", len(slr.table.conflicts), len(lr1.table.conflicts))
    )


def comparison_text(grammar_path: str, tokens_str: str, slr: PerfRow, lr1: PerfRow) -> str:
    """The performance comparison report written to comparison.txt."""

    def row(label: str, a: str, b: str) -> str:
        return f"{label.ljust(28)} | {a.rjust(14)} | {b.rjust(14)}\n"

    parts = [
        "Bottom-Up Parser Suite Performance Comparison\n",
        f"Grammar: {grammar_path}\n",
        f"Input tokens: {tokens_str}\n\n",
        f"{'Metric'.ljust(28)} | {'SLR(1)'.rjust(14)} | {'LR(1)'.rjust(14)}\n",
        "-" * 28 + "-+-" + "-" * 14 + "-+-" + "-" * 14 + "\n",
        row("Number of states", str(slr.states), str(lr1.states)),
        row("Conflicts", str(slr.conflicts), str(lr1.conflicts)),
        row("ACTION entries", str(slr.action_entries), str(lr1.action_entries)),
        row("GOTO entries", str(slr.goto_entries), str(lr1.goto_entries)),
        row(
            "Total table entries",
            str(slr.action_entries + slr.goto_entries),
            str(lr1.action_entries + lr1.goto_entries),
        ),
        row("Approx table bytes", str(slr.approx_bytes), str(lr1.approx_bytes)),
        row("Table build time (ms)", f"{slr.build_ms:.3f}", f"{lr1.build_ms:.3f}"),
        row("Parse time (ms)", f"{slr.parse_ms:.3f}", f"{lr1.parse_ms:.3f}"),
    ]
    if slr.parse_iters > 0 and lr1.parse_iters > 0:
        slr_rate = slr.parse_iters * 1000.0 / max(0.001, slr.parse_ms)
        lr1_rate = lr1.parse_iters * 1000.0 / max(0.001, lr1.parse_ms)
        parts.append(row("Parse throughput (iters/s)", f"{slr_rate:.1f}", f"{lr1_rate:.1f}"))
    parts.append("\nNotes:\n")
    parts.append('- "Approx table bytes" is a rough estimate (excludes map/node overhead).\n')
    parts.append("- Parse timing runs multiple iterations for stability.\n")
    return "".join(parts)


@dataclass
class _Options:
    grammar: str = DEFAULT_GRAMMAR
    tokens: str = DEFAULT_TOKENS
    outdir: str = DEFAULT_OUTDIR


def _parse_args(argv: Iterable[str]) -> _Options | None:
    """Parse arguments; None means help was requested."""
    values = {"--grammar": DEFAULT_GRAMMAR, "--tokens": DEFAULT_TOKENS, "--outdir": DEFAULT_OUTDIR}
    args = iter(argv)
    for arg in args:
        if arg in ("--help", "-h"):
            return None
        if arg not in _VALUE_FLAGS:
            raise _UsageError(f"Unknown argument: {arg}")
        value = next(args, None)
        if value is None:
            raise _UsageError(f"Missing value for {arg}")
        values[arg] = value
    return _Options(values["--grammar"], values["--tokens"], values["--outdir"])


def _write_file(path: Path, content: str) -> None:
    try:
        path.write_bytes(content.encode("utf-8"))
    except OSError as exc:
        raise OSError(f"Failed to open output file for writing: {path}") from exc


def _perf_row(result: ParserBuildResult, build_ms: float, parse_ms: float, iters: int) -> PerfRow:
    table = result.table
    return PerfRow(
        states=len(result.collection.states),
        conflicts=len(table.conflicts),
        action_entries=table.action_entry_count(),
        goto_entries=table.goto_entry_count(),
        approx_bytes=table.approx_bytes(),
        build_ms=build_ms,
        parse_ms=parse_ms,
        parse_iters=iters,
    )


def _timed_parse_ms(parser: ShiftReduceParser, tokens: Sequence[str], iters: int) -> float:
    start = time.perf_counter()
    for _ in range(iters):
        parser.parse(tokens)
    return (time.perf_counter() - start) * 1000.0


def _run(options: _Options) -> None:
    outdir = Path(options.outdir)
    grammar = Grammar.from_file(options.grammar)
    grammar.augment()
    grammar.compute_first()
    grammar.compute_follow()
    _write_file(outdir / "augmented_grammar.txt", grammar.to_text())

    start = time.perf_counter()
    slr_result = SLRParserBuilder(grammar).build()
    slr_build_ms = (time.perf_counter() - start) * 1000.0
    _write_file(outdir / "slr_items.txt", item_sets_to_string(grammar, slr_result.collection))
    _write_file(outdir / "slr_parsing_table.txt", slr_result.table.to_text())

    start = time.perf_counter()
    lr1_result = LR1ParserBuilder(grammar).build()
    lr1_build_ms = (time.perf_counter() - start) * 1000.0
    _write_file(outdir / "lr1_items.txt", item_sets_to_string(grammar, lr1_result.collection))
    _write_file(outdir / "lr1_parsing_table.txt", lr1_result.table.to_text())

    sys.stdout.write(format_build_comparison(slr_result, lr1_result))

    tokens = options.tokens.split()

    lr1_parser = ShiftReduceParser(grammar, lr1_result.table)
    lr1_parse = lr1_parser.parse(tokens)
    _write_file(outdir / "lr1_trace.txt", trace_to_string(lr1_parse.trace))
    if lr1_parse.accepted:
        _write_file(outdir / "parse_trees.txt", lr1_parse.tree.to_text())
    else:
        _write_file(outdir / "parse_trees.txt", f"LR(1) parse error: {lr1_parse.error}\n")

    slr_parser = ShiftReduceParser(grammar, slr_result.table)
    slr_parse = slr_parser.parse(tokens)
    _write_file(outdir / "slr_trace.txt", trace_to_string(slr_parse.trace))

    slr_perf = _perf_row(
        slr_result, slr_build_ms, _timed_parse_ms(slr_parser, tokens, PARSE_ITERATIONS),
        PARSE_ITERATIONS,
    )
    lr1_perf = _perf_row(
        lr1_result, lr1_build_ms, _timed_parse_ms(lr1_parser, tokens, PARSE_ITERATIONS),
        PARSE_ITERATIONS,
    )
    _write_file(
        outdir / "comparison.txt",
        comparison_text(options.grammar, options.tokens, slr_perf, lr1_perf),
    )
    sys.stdout.write(f"\nOutputs written to {options.outdir}/\n")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the parser suite; returns the process exit status."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        options = _parse_args(argv)
        if options is None:
            sys.stdout.write(USAGE)
            return 0
        _run(options)
        return 0
    except (ValueError, RuntimeError, OSError) as exc:
        sys.stderr.write(f"Fatal: {exc}\n")
        sys.stdout.write(USAGE)
        return 1


if __name__ == "__main__":
    sys.exit(main())