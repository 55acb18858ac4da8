# lrsuite

A bottom-up parser suite. It reads a context-free grammar and builds an SLR(1)
table and a canonical LR(1) parsing table for it. It then parses a token
string with each table, using a shift-reduce parser. It writes out:

- the item sets
- the tables and any conflicts
- step-by-step traces
- the parse tree
- a comparison of the two methods by size and timing

## Installing

```
pip install .
```

To run the tests, install the `test` extra with `pip install .[test]` and then
run `pytest`.

## Grammar files

Each line holds one production, and alternatives are separated by `|`:

```
S -> L = R | R
L -> * R | id
R -> L
```

- Symbols are separated by whitespace.
- A symbol that starts with an ASCII uppercase letter is a nonterminal. Any other symbol is a terminal.
- The left-hand side of the first production line is the start symbol.
- An empty alternative stands for epsilon. So does `@` or `epsilon`. If either word appears anywhere in an alternative, that whole alternative is treated as empty.
- Blank lines are skipped. Lines that start with `//` are comments.

A malformed grammar raises `lrsuite.grammar.GrammarError`, a subclass of
`ValueError`. The grammar is malformed in these cases:

- a line has no `->`
- a line has an empty side
- a left-hand side does not start with an uppercase letter
- the file has no productions

## Command line

```
lrsuite --grammar grammar.txt --tokens "id = id" --outdir output
```

Separate the tokens with whitespace. The parser adds the end marker `$` itself.
Use `--help` or `-h` to print usage.

The defaults are:

| Option | Default |
| --- | --- |
| `--grammar` | `input/grammar_with_conflict.txt` |
| `--tokens` | `id = id` |
| `--outdir` | `output` |

No grammar file ships with the package, so pass `--grammar` unless that
default path exists where you run the command.

The output directory must already exist, because it is not created for you.
These files are written into it:

| File | Contents |
| --- | --- |
| `augmented_grammar.txt` | numbered productions, including the augmented start `SPrime -> S` |
| `slr_items.txt`, `lr1_items.txt` | the canonical LR(0) and LR(1) item sets |
| `slr_parsing_table.txt`, `lr1_parsing_table.txt` | the ACTION/GOTO tables and any conflicts |
| `lr1_trace.txt`, `slr_trace.txt` | shift-reduce traces |
| `parse_trees.txt` | the LR(1) parse tree, or the LR(1) parse error |
| `comparison.txt` | states, conflicts, table entries, approximate size, build and parse timings |

Each parse is timed over 300 iterations.

A short table of state and conflict counts for each method is printed to
standard output. On an error the command does three things:

- prints `Fatal: <message>` to standard error
- shows the usage
- exits with status 1

## Library use

```python
from lrsuite.grammar import Grammar
from lrsuite.builders import LR1ParserBuilder
from lrsuite.shift_reduce import ShiftReduceParser

grammar = Grammar.from_lines(["E -> E + T | T", "T -> id"])
grammar.augment()
result = LR1ParserBuilder(grammar).build()
print(result.table.to_text())

outcome = ShiftReduceParser(grammar, result.table).parse(["id", "+", "id"])
if outcome.accepted:
    print(outcome.tree.to_text())
else:
    print(outcome.error)
```

### Modules

- `lrsuite.grammar`
  - `Grammar.from_file`, `from_lines` and `from_text` read a grammar.
  - `augment()` adds the new start production.
  - `compute_first()` and `compute_follow()` fill `first_sets` and `follow_sets`.
  - `first_of_sequence()` gives FIRST of a list of symbols.
- `lrsuite.items`
  - `Item`, `ItemSet` and `CanonicalCollection` hold items and collections.
  - `ItemsBuilder` provides `closure_lr0`/`closure_lr1`, `goto_lr0`/`goto_lr1`, `build_canonical_lr0` and `build_canonical_lr1`.
  - `item_to_string` renders an item.
- `lrsuite.parsing_table`
  - `ParsingTable` stores ACTION and GOTO entries.
  - `set_action` keeps the first action set for a cell. It records any differing action as a `Conflict` in `table.conflicts` and returns that conflict.
  - `to_text()` renders the table.
- `lrsuite.builders`
  - `SLRParserBuilder` reduces on FOLLOW sets.
  - `LR1ParserBuilder` reduces only on each item's lookahead.
  - Both expect an augmented grammar and return a `ParserBuildResult` with `collection` and `table`.
- `lrsuite.shift_reduce`
  - `ShiftReduceParser.parse(tokens)` returns a `ParseResult` with `accepted`, `trace`, `tree` and `error`.
  - A reduction that would pop more entries than the stack holds raises `ParserStackError`.
- `lrsuite.tree`
  - `ParseTree` and `ParseTreeNode` hold the tree.
  - `to_text()` draws it with box-drawing branches.
- `lrsuite.cli`
  - `main(argv=None)` runs the command.
  - `item_sets_to_string`, `trace_to_string`, `format_build_comparison` and `comparison_text` render the reports.

## What it does not do

- It does not resolve conflicts by precedence or associativity. When a cell already holds an action, a differing action is only reported.
- It does not build LALR(1) tables.
- It has no lexer. The input must already be split into tokens.