"""Property-based tests for the renderer using Hypothesis.

These tests verify invariants that hold for any tree built from the
supported constructs:
1. Rendering is deterministic
2. A serialization round-trip does not change the output
3. Braces balance and indentation is whole units
4. No line carries trailing whitespace
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from helpers import bare, binop, block, body, cmd, const, expr_stmt, script, sq, var
from pspretty import render
from pspretty.nodes import ArrayLiteral, FunctionDefinition, Hashtable, IfStatement, ParenExpression, WhileStatement
from pspretty.serialization import from_json, to_json
from pspretty.tokens import TokenKind

names = st.from_regex(r"[a-z][a-z0-9]{0,5}", fullmatch=True)
operators = st.sampled_from([TokenKind.IEQ, TokenKind.CEQ, TokenKind.PLUS, TokenKind.BOR, TokenKind.AND])

leaves = st.one_of(
    names.map(var),
    st.integers(min_value=-1000, max_value=1000).map(const),
    names.map(sq),
)

expressions = st.recursive(
    leaves,
    lambda children: st.one_of(
        st.builds(binop, children, operators, children),
        st.lists(children, min_size=2, max_size=3).map(lambda items: ArrayLiteral(elements=tuple(items))),
        st.lists(st.tuples(names.map(bare), children.map(expr_stmt)), max_size=3).map(
            lambda pairs: Hashtable(key_value_pairs=tuple(pairs))
        ),
        children.map(lambda child: ParenExpression(pipeline=expr_stmt(child))),
    ),
    max_leaves=8,
)

statements = st.recursive(
    st.one_of(expressions.map(expr_stmt), names.map(cmd)),
    lambda children: st.one_of(
        st.builds(
            lambda condition, stmts: IfStatement(clauses=((condition, block(*stmts)),)),
            expressions.map(expr_stmt),
            st.lists(children, max_size=3),
        ),
        st.builds(
            lambda condition, stmts: WhileStatement(condition=condition, body=block(*stmts)),
            expressions.map(expr_stmt),
            st.lists(children, max_size=3),
        ),
        st.builds(
            lambda name, stmts: FunctionDefinition(name=name, body=body(*stmts)),
            names,
            st.lists(children, max_size=3),
        ),
    ),
    max_leaves=10,
)

scripts = st.lists(statements, max_size=5).map(lambda stmts: script(*stmts))


class TestRenderProperties:
    """Invariants over generated trees."""

    @given(tree=scripts)
    @settings(max_examples=100)
    def test_deterministic(self, tree) -> None:  # type: ignore[no-untyped-def]
        assert render(tree) == render(tree)

    @given(tree=scripts)
    @settings(max_examples=100)
    def test_serialization_round_trip_renders_identically(self, tree) -> None:  # type: ignore[no-untyped-def]
        restored = from_json(to_json(tree))
        assert restored == tree
        assert render(restored) == render(tree)

    @given(tree=scripts)
    @settings(max_examples=100)
    def test_braces_balance(self, tree) -> None:  # type: ignore[no-untyped-def]
        text = render(tree)
        assert text.count("{") == text.count("}")
        assert text.count("(") == text.count(")")

    @given(tree=scripts)
    @settings(max_examples=100)
    def test_whole_unit_indentation(self, tree) -> None:  # type: ignore[no-untyped-def]
        for line in render(tree).split("\n"):
            stripped = line.lstrip(" ")
            assert (len(line) - len(stripped)) % 4 == 0

    @given(tree=scripts)
    @settings(max_examples=100)
    def test_no_trailing_whitespace(self, tree) -> None:  # type: ignore[no-untyped-def]
        for line in render(tree).split("\n"):
            assert line == line.rstrip()
