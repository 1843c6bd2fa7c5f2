"""Small builders for constructing ASTs by hand in tests."""

from pspretty.nodes import (
    BinaryExpression,
    Command,
    CommandExpression,
    ConstantExpression,
    NamedBlock,
    Pipeline,
    ScriptBlock,
    StatementBlock,
    StringConstantExpression,
    StringConstantType,
    TypeConstraint,
    TypeName,
    VariableExpression,
)
from pspretty.tokens import TokenKind


def const(value):  # type: ignore[no-untyped-def]
    return ConstantExpression(value=value)


def var(name: str) -> VariableExpression:
    return VariableExpression(name=name)


def bare(text: str) -> StringConstantExpression:
    return StringConstantExpression(value=text)


def sq(text: str) -> StringConstantExpression:
    return StringConstantExpression(value=text, string_type=StringConstantType.SINGLE_QUOTED)


def dq(text: str) -> StringConstantExpression:
    return StringConstantExpression(value=text, string_type=StringConstantType.DOUBLE_QUOTED)


def binop(left, operator: TokenKind, right) -> BinaryExpression:  # type: ignore[no-untyped-def]
    return BinaryExpression(left=left, operator=operator, right=right)


def type_constraint(name: str) -> TypeConstraint:
    return TypeConstraint(type_name=TypeName(name))


def expr_stmt(expression) -> Pipeline:  # type: ignore[no-untyped-def]
    """Wrap an expression as a statement, the way parsers do."""
    return Pipeline(elements=(CommandExpression(expression=expression),))


def cmd(*words, **kwargs) -> Pipeline:  # type: ignore[no-untyped-def]
    """Single-command pipeline; plain strings become bare words."""
    elements = tuple(bare(w) if isinstance(w, str) else w for w in words)
    return Pipeline(elements=(Command(elements=elements, **kwargs),))


def block(*statements, traps=()) -> StatementBlock:  # type: ignore[no-untyped-def]
    return StatementBlock(statements=tuple(statements), traps=tuple(traps))


def script(*statements, traps=(), **kwargs) -> ScriptBlock:  # type: ignore[no-untyped-def]
    """Script whose statements live in the implicit end block."""
    end_block = NamedBlock(statements=tuple(statements), traps=tuple(traps), unnamed=True)
    return ScriptBlock(end_block=end_block, **kwargs)


def body(*statements) -> ScriptBlock:  # type: ignore[no-untyped-def]
    """Function or method body."""
    return ScriptBlock(end_block=NamedBlock(statements=tuple(statements), unnamed=True))
