from lrsuite.tree import ParseTree, ParseTreeNode


def _count(node):
    return 1 + sum(_count(c) for c in node.children)


def _sample():
    return ParseTreeNode(
        "S",
        [
            ParseTreeNode("a"),
            ParseTreeNode("B", [ParseTreeNode("b")]),
        ],
    )


def test_empty_tree_renders_nothing():
    assert ParseTree().to_text() == ""


def test_root_only():
    assert ParseTree(ParseTreeNode("S")).to_text() == "S\n"


def test_worked_example():
    text = ParseTree(_sample()).to_text()
    assert text == "S\n├── a\n└── B\n    └── b\n"


def test_one_line_per_node():
    root = ParseTreeNode(
        "E",
        [
            ParseTreeNode("T", [ParseTreeNode("F", [ParseTreeNode("id")])]),
            ParseTreeNode("+"),
            ParseTreeNode("T", [ParseTreeNode("id")]),
        ],
    )
    lines = ParseTree(root).to_text().splitlines()
    assert len(lines) == _count(root)
    assert lines[0] == "E"


def test_non_last_branch_continues_vertical_line():
    root = ParseTreeNode(
        "S",
        [ParseTreeNode("A", [ParseTreeNode("x")]), ParseTreeNode("c")],
    )
    lines = ParseTree(root).to_text().splitlines()
    assert lines[1].startswith("├── ")
    assert lines[2].startswith("│   └── ")
    assert lines[3].startswith("└── ")


def test_children_keep_order():
    root = ParseTreeNode("S", [ParseTreeNode(s) for s in ["p", "q", "r"]])
    lines = ParseTree(root).to_text().splitlines()
    assert [line[-1] for line in lines[1:]] == ["p", "q", "r"]