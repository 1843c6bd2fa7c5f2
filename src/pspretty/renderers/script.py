"""PowerShell script renderer using the StringBuilder pattern.

Renders a typed AST back into canonically formatted PowerShell in a single
streaming pass: every handler writes its keywords and punctuation around
recursive renders of its children, in source order. There is no
intermediate document and no line-width handling.

Layout rules:
- Braces open on their own line; block bodies are indented one unit.
- Statements are separated by one line break, plus a blank line after any
  statement that has a brace-delimited body.
- Infix operators are padded with single spaces; lists use ``, ``.

Thread Safety:
All per-render state is encapsulated in RenderContext, created fresh for each
render() call. Multiple threads can safely share a single ScriptRenderer
instance and call render() concurrently without synchronization.

"""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field

from pspretty.config import RenderConfig, get_render_config
from pspretty.errors import UnsupportedConstructError
from pspretty.nodes import (
    AnyTypeName,
    ArrayExpression,
    ArrayLiteral,
    ArrayTypeName,
    AssignmentStatement,
    Attribute,
    AttributedExpression,
    BaseCtorInvokeMemberExpression,
    BinaryExpression,
    BlockStatement,
    BreakStatement,
    CatchClause,
    Command,
    CommandExpression,
    CommandParameter,
    ConfigurationDefinition,
    ConstantExpression,
    ContinueStatement,
    ConvertExpression,
    DataStatement,
    DoUntilStatement,
    DoWhileStatement,
    DynamicKeywordStatement,
    ErrorExpression,
    ErrorStatement,
    ExitStatement,
    ExpandableStringExpression,
    FileRedirection,
    ForEachStatement,
    ForStatement,
    FunctionDefinition,
    FunctionMember,
    GenericTypeName,
    Hashtable,
    IfStatement,
    IndexExpression,
    InvokeMemberExpression,
    MemberExpression,
    MergingRedirection,
    NamedAttributeArgument,
    NamedBlock,
    Node,
    ParamBlock,
    Parameter,
    ParenExpression,
    Pipeline,
    PipelineChain,
    PropertyMember,
    RedirectionStream,
    ReturnStatement,
    ScriptBlock,
    ScriptBlockExpression,
    StatementBlock,
    StringConstantExpression,
    StringConstantType,
    SubExpression,
    SwitchFlags,
    SwitchStatement,
    TernaryExpression,
    ThrowStatement,
    TrapStatement,
    TryStatement,
    TypeConstraint,
    TypeDefinition,
    TypeExpression,
    TypeKind,
    TypeName,
    UnaryExpression,
    UsingExpression,
    UsingStatement,
    UsingStatementKind,
    VariableExpression,
    WhileStatement,
    is_block_shaped,
)
from pspretty.spelling import stream_indicator, token_text
from pspretty.stringbuilder import StringBuilder
from pspretty.tokens import Token, TokenKind
from pspretty.utils.text import format_variable_name, here_string, quote_double, quote_single

# Between arguments, array elements, catch types and inline parameters
_LIST_SEPARATOR = ", "

_USING_KEYWORDS: dict[UsingStatementKind, str] = {
    UsingStatementKind.ASSEMBLY: "assembly",
    UsingStatementKind.COMMAND: "command",
    UsingStatementKind.MODULE: "module",
    UsingStatementKind.NAMESPACE: "namespace",
    UsingStatementKind.TYPE: "type",
}

_TYPE_KEYWORDS: dict[TypeKind, TokenKind] = {
    TypeKind.CLASS: TokenKind.CLASS,
    TypeKind.INTERFACE: TokenKind.INTERFACE,
    TypeKind.ENUM: TokenKind.ENUM,
}

# Written in this order between ``switch`` and the condition
_SWITCH_FLAG_NAMES: tuple[tuple[SwitchFlags, str], ...] = (
    (SwitchFlags.REGEX, "-regex"),
    (SwitchFlags.WILDCARD, "-wildcard"),
    (SwitchFlags.EXACT, "-exact"),
    (SwitchFlags.CASE_SENSITIVE, "-casesensitive"),
    (SwitchFlags.FILE, "-file"),
)

_PREFIX_OPERATORS = frozenset({TokenKind.PLUS_PLUS, TokenKind.MINUS_MINUS})
_POSTFIX_OPERATORS = frozenset({TokenKind.POSTFIX_PLUS_PLUS, TokenKind.POSTFIX_MINUS_MINUS})

# Constructs the tree can hold but that have no textual form here
_UNSUPPORTED_NODES: tuple[type[Node], ...] = (
    BlockStatement,
    DataStatement,
    ConfigurationDefinition,
    DynamicKeywordStatement,
    ErrorStatement,
    ErrorExpression,
)


@dataclass(slots=True)
class RenderContext:
    """Per-render mutable state.

    Created fresh for each render() call and discarded when it returns.

    Attributes:
        sb: Output buffer and indentation depth
        root: Node the render started from; a root ScriptBlock has no braces
        config: Config snapshot taken when the render started
        tokens: Token stream the tree was parsed from

    """

    sb: StringBuilder
    root: Node
    config: RenderConfig
    tokens: tuple[Token, ...] = field(default_factory=tuple)


class ScriptRenderer:
    """Render AST to PowerShell source using StringBuilder pattern.

    Usage:
        >>> from pspretty.nodes import ConstantExpression
        >>> ScriptRenderer().render(ConstantExpression(value=True))
        '$true'

    Thread Safety:
        Multiple threads can safely share a single ScriptRenderer instance.
        Each render() call creates an independent RenderContext.
    """

    __slots__ = ("_config",)

    def __init__(self, *, config: RenderConfig | None = None) -> None:
        """Initialize renderer.

        Args:
            config: Fixed configuration; when None, the active context
                config is read at the start of each render
        """
        self._config = config

    def render(self, node: Node, tokens: Iterable[Token] = ()) -> str:
        """Render a tree to PowerShell source text.

        Args:
            node: Root of the tree (usually the script's ScriptBlock)
            tokens: Token stream the tree was parsed from

        Returns:
            Formatted script text

        Raises:
            UnsupportedConstructError: If the tree holds a construct, token
                kind or literal kind with no formatting rule.
        """
        config = self._config or get_render_config()
        ctx = RenderContext(
            sb=StringBuilder(indent_unit=config.indent_unit, newline=config.newline),
            root=node,
            config=config,
            tokens=tuple(tokens),
        )
        self._render(node, ctx)
        return ctx.sb.build()

    # =========================================================================
    # Dispatch
    # =========================================================================

    def _render(self, node: Node, ctx: RenderContext) -> None:
        """Render one node by kind."""
        sb = ctx.sb
        match node:
            # Script structure
            case ScriptBlock():
                self._render_script_block(node, ctx)
            case NamedBlock():
                self._write_named_block(node, ctx, explicit=not node.unnamed)
            case StatementBlock():
                self._write_body(node, ctx)
            case ParamBlock():
                self._render_param_block(node, ctx)
            case Parameter():
                self._write_parameter(node, ctx, inline=False)

            # Attributes
            case Attribute():
                self._render_attribute(node, ctx)
            case TypeConstraint():
                sb.append("[")
                self._write_type_name(node.type_name, ctx)
                sb.append("]")
            case NamedAttributeArgument():
                sb.append(node.argument_name)
                if not node.expression_omitted and node.argument is not None:
                    sb.append(" = ")
                    self._render(node.argument, ctx)

            # Pipelines and commands
            case Pipeline():
                self._intersperse(node.elements, " | ", ctx)
                if node.background:
                    sb.append(" &")
            case PipelineChain():
                self._render(node.left, ctx)
                sb.append(" ").append(token_text(node.operator)).append(" ")
                self._render(node.right, ctx)
                if node.background:
                    sb.append(" &")
            case AssignmentStatement():
                self._render(node.left, ctx)
                sb.append(" ").append(token_text(node.operator)).append(" ")
                self._render(node.right, ctx)
            case Command():
                self._render_command(node, ctx)
            case CommandExpression():
                self._render(node.expression, ctx)
                self._write_redirections(node.redirections, ctx)
            case CommandParameter():
                sb.append("-").append(node.name)
                if node.argument is not None:
                    sb.append(":")
                    self._render(node.argument, ctx)

            # Redirections
            case FileRedirection():
                if node.from_stream is not RedirectionStream.OUTPUT:
                    sb.append(stream_indicator(node.from_stream))
                sb.append(">>" if node.append else ">")
                self._render(node.target, ctx)
            case MergingRedirection():
                sb.append(stream_indicator(node.from_stream))
                sb.append(">&")
                sb.append(stream_indicator(node.to_stream))

            # Control flow
            case IfStatement():
                self._render_if(node, ctx)
            case WhileStatement():
                self._write_label(node.label, ctx)
                sb.append("while (")
                self._render(node.condition, ctx)
                sb.append(")")
                self._write_body(node.body, ctx)
            case DoWhileStatement():
                self._write_label(node.label, ctx)
                sb.append("do")
                self._write_body(node.body, ctx)
                sb.append(" while (")
                self._render(node.condition, ctx)
                sb.append(")")
            case DoUntilStatement():
                self._write_label(node.label, ctx)
                sb.append("do")
                self._write_body(node.body, ctx)
                sb.append(" until (")
                self._render(node.condition, ctx)
                sb.append(")")
            case ForStatement():
                self._render_for(node, ctx)
            case ForEachStatement():
                self._write_label(node.label, ctx)
                sb.append("foreach (")
                self._render(node.variable, ctx)
                sb.append(" in ")
                self._render(node.condition, ctx)
                sb.append(")")
                self._write_body(node.body, ctx)
            case SwitchStatement():
                self._render_switch(node, ctx)
            case TryStatement():
                self._render_try(node, ctx)
            case CatchClause():
                sb.append("catch")
                if node.catch_types:
                    sb.append(" ")
                    self._intersperse(node.catch_types, _LIST_SEPARATOR, ctx)
                self._write_body(node.body, ctx)
            case TrapStatement():
                sb.append("trap")
                if node.trap_type is not None:
                    sb.append(" ")
                    self._render(node.trap_type, ctx)
                self._write_body(node.body, ctx)
            case BreakStatement():
                self._write_control_flow("break", node.label, ctx)
            case ContinueStatement():
                self._write_control_flow("continue", node.label, ctx)
            case ReturnStatement():
                self._write_control_flow("return", node.pipeline, ctx)
            case ExitStatement():
                self._write_control_flow("exit", node.pipeline, ctx)
            case ThrowStatement():
                self._write_control_flow("throw", node.pipeline, ctx)

            # Definitions
            case FunctionDefinition():
                self._render_function_definition(node, ctx)
            case TypeDefinition():
                self._render_type_definition(node, ctx)
            case PropertyMember():
                self._render_property_member(node, ctx)
            case FunctionMember():
                self._render_function_member(node, ctx)
            case UsingStatement():
                self._render_using_statement(node, ctx)

            # Expressions
            case ConstantExpression():
                self._render_constant(node, ctx)
            case StringConstantExpression():
                self._render_string_constant(node, ctx)
            case ExpandableStringExpression():
                self._render_expandable_string(node, ctx)
            case VariableExpression():
                sb.append("@" if node.splatted else "$")
                sb.append(format_variable_name(node.name))
            case UsingExpression():
                if not isinstance(node.sub_expression, VariableExpression):
                    raise UnsupportedConstructError(
                        type(node.sub_expression),
                        f"Unsupported $using: operand: {type(node.sub_expression).__name__}",
                    )
                sb.append("$").append(format_variable_name(f"using:{node.sub_expression.name}"))
            case BinaryExpression():
                self._render(node.left, ctx)
                sb.append(" ").append(token_text(node.operator)).append(" ")
                self._render(node.right, ctx)
            case UnaryExpression():
                self._render_unary(node, ctx)
            case TernaryExpression():
                self._render(node.condition, ctx)
                sb.append(" ? ")
                self._render(node.if_true, ctx)
                sb.append(" : ")
                self._render(node.if_false, ctx)
            case ConvertExpression():
                self._render(node.type_constraint, ctx)
                self._render(node.child, ctx)
            case AttributedExpression():
                self._render(node.attribute, ctx)
                self._render(node.child, ctx)
            case TypeExpression():
                sb.append("[")
                self._write_type_name(node.type_name, ctx)
                sb.append("]")
            case MemberExpression():
                self._render(node.expression, ctx)
                sb.append("::" if node.static else ".")
                self._render(node.member, ctx)
            case InvokeMemberExpression():
                self._render(node.expression, ctx)
                sb.append("::" if node.static else ".")
                self._render(node.member, ctx)
                sb.append("(")
                self._intersperse(node.arguments, _LIST_SEPARATOR, ctx)
                sb.append(")")
            case BaseCtorInvokeMemberExpression():
                if node.arguments:
                    sb.append("base(")
                    self._intersperse(node.arguments, _LIST_SEPARATOR, ctx)
                    sb.append(")")
            case IndexExpression():
                self._render(node.target, ctx)
                sb.append("[")
                self._render(node.index, ctx)
                sb.append("]")
            case ArrayLiteral():
                self._intersperse(node.elements, _LIST_SEPARATOR, ctx)
            case ArrayExpression():
                sb.append("@(")
                self._write_statements(node.sub_expression.statements, node.sub_expression.traps, ctx)
                sb.append(")")
            case SubExpression():
                sb.append("$(")
                self._write_statements(node.sub_expression.statements, node.sub_expression.traps, ctx)
                sb.append(")")
            case ParenExpression():
                sb.append("(")
                self._render(node.pipeline, ctx)
                sb.append(")")
            case Hashtable():
                self._render_hashtable(node, ctx)
            case ScriptBlockExpression():
                self._render(node.script_block, ctx)

            case _ if isinstance(node, _UNSUPPORTED_NODES):
                raise UnsupportedConstructError(type(node))
            case _:
                raise UnsupportedConstructError(type(node), f"Unknown node kind: {type(node).__name__}")

    # =========================================================================
    # Script structure
    # =========================================================================

    def _render_script_block(self, node: ScriptBlock, ctx: RenderContext) -> None:
        """Render a script block; only a nested one gets braces.

        Order: using statements, param block, dynamicparam/begin/process
        blocks, end block, each group separated by a blank line. The end
        block is written as ``end { ... }`` when any other named block is
        present, otherwise its statements are written directly.
        """
        sb = ctx.sb
        nested = node is not ctx.root
        if nested and _is_empty_script_block(node):
            sb.append("{}")
            return

        if nested:
            sb.append("{").indent()

        need_gap = False
        if node.using_statements:
            self._intersperse_with(node.using_statements, lambda u: self._render(u, ctx), sb.newline)
            need_gap = True

        if node.param_block is not None:
            if need_gap:
                sb.newline(2)
            self._render(node.param_block, ctx)
            need_gap = True

        explicit_end = False
        for named_block in (node.dynamic_param_block, node.begin_block, node.process_block):
            if named_block is None:
                continue
            if need_gap:
                sb.newline(2)
            self._write_named_block(named_block, ctx, explicit=True)
            need_gap = explicit_end = True

        end_block = node.end_block
        if end_block is not None and (end_block.statements or end_block.traps):
            if need_gap:
                sb.newline(2)
            if explicit_end:
                self._write_named_block(end_block, ctx, explicit=True)
            else:
                self._write_statements(end_block.statements, end_block.traps, ctx)

        if nested:
            sb.dedent().append("}")

    def _write_named_block(self, node: NamedBlock, ctx: RenderContext, *, explicit: bool) -> None:
        """Write ``begin``/``process``/``end``/``dynamicparam`` and its body."""
        if explicit:
            # An unnamed end block still needs its keyword once spelled out
            kind = TokenKind.END if node.unnamed else node.block_kind
            ctx.sb.append(token_text(kind))
        self._write_body_parts(node.statements, node.traps, ctx)

    def _render_param_block(self, node: ParamBlock, ctx: RenderContext) -> None:
        """Render ``param(...)`` with one parameter per paragraph."""
        sb = ctx.sb
        for attribute in node.attributes:
            self._render(attribute, ctx)
            sb.newline()

        sb.append("param(")
        if not node.parameters:
            sb.append(")")
            return

        sb.indent()
        self._intersperse_with(
            node.parameters,
            lambda p: self._write_parameter(p, ctx, inline=False),
            lambda: sb.append(",").newline(2),
        )
        sb.dedent().append(")")

    def _write_parameter(self, node: Parameter, ctx: RenderContext, *, inline: bool) -> None:
        """Write attributes, name and default value of a parameter.

        In a param block each attribute gets its own line; inline parameters
        (function headers, method signatures) keep them on one line.
        """
        for attribute in node.attributes:
            self._render(attribute, ctx)
            if not inline:
                ctx.sb.newline()

        self._render(node.name, ctx)

        if node.default_value is not None:
            ctx.sb.append(" = ")
            self._render(node.default_value, ctx)

    def _write_inline_parameters(self, parameters: Sequence[Parameter], ctx: RenderContext) -> None:
        self._intersperse_with(
            parameters,
            lambda p: self._write_parameter(p, ctx, inline=True),
            lambda: ctx.sb.append(_LIST_SEPARATOR),
        )

    # =========================================================================
    # Attributes and type names
    # =========================================================================

    def _render_attribute(self, node: Attribute, ctx: RenderContext) -> None:
        """Render ``[Name(positional, named = value)]``."""
        sb = ctx.sb
        sb.append("[")
        self._write_type_name(node.type_name, ctx)
        sb.append("(")
        self._intersperse(node.positional_arguments, _LIST_SEPARATOR, ctx)
        if node.positional_arguments and node.named_arguments:
            sb.append(_LIST_SEPARATOR)
        self._intersperse(node.named_arguments, _LIST_SEPARATOR, ctx)
        sb.append(")]")

    def _write_type_name(self, type_name: AnyTypeName, ctx: RenderContext) -> None:
        """Write a type name without the enclosing brackets."""
        sb = ctx.sb
        match type_name:
            case TypeName():
                sb.append(type_name.name)
            case ArrayTypeName():
                self._write_type_name(type_name.element_type, ctx)
                sb.append("[").append("," * (type_name.rank - 1)).append("]")
            case GenericTypeName():
                sb.append(type_name.type_name.name).append("[")
                self._intersperse_with(
                    type_name.generic_arguments,
                    lambda t: self._write_type_name(t, ctx),
                    lambda: sb.append(_LIST_SEPARATOR),
                )
                sb.append("]")
            case _:
                raise UnsupportedConstructError(type(type_name), f"Unknown type name kind: {type(type_name).__name__}")

    # =========================================================================
    # Commands
    # =========================================================================

    def _render_command(self, node: Command, ctx: RenderContext) -> None:
        sb = ctx.sb
        if node.invocation_operator is not None and node.invocation_operator is not TokenKind.UNKNOWN:
            sb.append(token_text(node.invocation_operator)).append(" ")
        self._intersperse(node.elements, " ", ctx)
        self._write_redirections(node.redirections, ctx)

    def _write_redirections(self, redirections: Sequence[Node], ctx: RenderContext) -> None:
        if redirections:
            ctx.sb.append(" ")
            self._intersperse(redirections, " ", ctx)

    # =========================================================================
    # Control flow
    # =========================================================================

    def _render_if(self, node: IfStatement, ctx: RenderContext) -> None:
        """Render ``if``, then each ``elseif`` and the ``else`` on new lines."""
        sb = ctx.sb
        for i, (condition, body) in enumerate(node.clauses):
            if i:
                sb.newline()
            sb.append("elseif (" if i else "if (")
            self._render(condition, ctx)
            sb.append(")")
            self._write_body(body, ctx)

        if node.else_clause is not None:
            sb.newline()
            sb.append("else")
            self._write_body(node.else_clause, ctx)

    def _render_for(self, node: ForStatement, ctx: RenderContext) -> None:
        sb = ctx.sb
        self._write_label(node.label, ctx)
        sb.append("for (")
        if node.initializer is not None:
            self._render(node.initializer, ctx)
        sb.append("; ")
        if node.condition is not None:
            self._render(node.condition, ctx)
        sb.append("; ")
        if node.iterator is not None:
            self._render(node.iterator, ctx)
        sb.append(")")
        self._write_body(node.body, ctx)

    def _render_switch(self, node: SwitchStatement, ctx: RenderContext) -> None:
        """Render a switch; clauses and the default are separated by blank lines."""
        sb = ctx.sb
        self._write_label(node.label, ctx)
        sb.append("switch ")
        for flag, name in _SWITCH_FLAG_NAMES:
            if flag in node.flags:
                sb.append(name).append(" ")
        sb.append("(")
        self._render(node.condition, ctx)
        sb.append(")")

        if not node.clauses and node.default is None:
            self._write_empty_block(ctx)
            return

        self._begin_block(ctx)

        def write_clause(clause: tuple[Node, StatementBlock]) -> None:
            condition, body = clause
            self._render(condition, ctx)
            self._write_body(body, ctx)

        self._intersperse_with(node.clauses, write_clause, lambda: sb.newline(2))

        if node.default is not None:
            if node.clauses:
                sb.newline(2)
            sb.append("default")
            self._write_body(node.default, ctx)

        self._end_block(ctx)

    def _render_try(self, node: TryStatement, ctx: RenderContext) -> None:
        sb = ctx.sb
        sb.append("try")
        self._write_body(node.body, ctx)

        for catch_clause in node.catch_clauses:
            sb.newline()
            self._render(catch_clause, ctx)

        if node.finally_block is not None:
            sb.newline()
            sb.append("finally")
            self._write_body(node.finally_block, ctx)

    def _write_control_flow(self, keyword: str, child: Node | None, ctx: RenderContext) -> None:
        """Write ``keyword`` or ``keyword <child>``."""
        ctx.sb.append(keyword)
        if child is not None:
            ctx.sb.append(" ")
            self._render(child, ctx)

    def _write_label(self, label: str | None, ctx: RenderContext) -> None:
        if label:
            ctx.sb.append(":").append(label).append(" ")

    # =========================================================================
    # Definitions
    # =========================================================================

    def _render_function_definition(self, node: FunctionDefinition, ctx: RenderContext) -> None:
        if node.is_workflow:
            raise UnsupportedConstructError(type(node), f"Workflow definitions are not supported: {node.name}")

        sb = ctx.sb
        sb.append(token_text(TokenKind.FILTER if node.is_filter else TokenKind.FUNCTION))
        sb.append(" ").append(node.name)
        if node.parameters:
            sb.append("(")
            self._write_inline_parameters(node.parameters, ctx)
            sb.append(")")
        sb.newline()
        self._render(node.body, ctx)

    def _render_type_definition(self, node: TypeDefinition, ctx: RenderContext) -> None:
        """Render a class, interface or enum.

        Class members are separated by blank lines; enum members by a
        trailing comma and a line break.
        """
        sb = ctx.sb
        keyword = _TYPE_KEYWORDS.get(node.kind)
        if keyword is None:
            raise UnsupportedConstructError(node.kind, f"Unknown type definition kind: {node.kind!r}")

        for attribute in node.attributes:
            self._render(attribute, ctx)
            sb.newline()

        sb.append(token_text(keyword)).append(" ").append(node.name)

        if node.base_types:
            sb.append(" : ")
            self._intersperse_with(
                node.base_types,
                lambda base: self._write_type_name(base.type_name, ctx),
                lambda: sb.append(_LIST_SEPARATOR),
            )

        if not node.members:
            self._write_empty_block(ctx)
            return

        self._begin_block(ctx)
        if node.kind is TypeKind.ENUM:
            self._intersperse_with(
                node.members,
                lambda member: self._write_enum_member(member, ctx),
                lambda: sb.append(",").newline(),
            )
        else:
            self._intersperse_with(
                node.members,
                lambda member: self._render(member, ctx),
                lambda: sb.newline(2),
            )
        self._end_block(ctx)

    def _write_enum_member(self, member: Node, ctx: RenderContext) -> None:
        if not isinstance(member, PropertyMember):
            raise UnsupportedConstructError(type(member), f"Enum members must be properties, got {type(member).__name__}")
        ctx.sb.append(member.name)
        if member.initial_value is not None:
            ctx.sb.append(" = ")
            self._render(member.initial_value, ctx)

    def _write_member_modifiers(self, node: PropertyMember | FunctionMember, ctx: RenderContext) -> None:
        """Write member attributes (one per line) and static/hidden keywords."""
        sb = ctx.sb
        for attribute in node.attributes:
            self._render(attribute, ctx)
            sb.newline()
        if node.is_static:
            sb.append(token_text(TokenKind.STATIC)).append(" ")
        if node.is_hidden:
            sb.append(token_text(TokenKind.HIDDEN)).append(" ")

    def _render_property_member(self, node: PropertyMember, ctx: RenderContext) -> None:
        sb = ctx.sb
        self._write_member_modifiers(node, ctx)
        if node.property_type is not None:
            self._render(node.property_type, ctx)
        sb.append("$").append(format_variable_name(node.name))
        if node.initial_value is not None:
            sb.append(" = ")
            self._render(node.initial_value, ctx)

    def _render_function_member(self, node: FunctionMember, ctx: RenderContext) -> None:
        """Render a method or constructor.

        A constructor's leading base-constructor call is lifted out of the
        body: with arguments it becomes a ``: base(...)`` suffix on the
        signature line, without arguments it is dropped.
        """
        sb = ctx.sb
        if node.is_constructor:
            for attribute in node.attributes:
                self._render(attribute, ctx)
                sb.newline()
            if node.is_static:
                sb.append(token_text(TokenKind.STATIC)).append(" ")
        else:
            self._write_member_modifiers(node, ctx)
            if node.return_type is not None:
                self._render(node.return_type, ctx)
                sb.append(" ")

        sb.append(node.name).append("(")
        self._write_inline_parameters(node.parameters, ctx)
        sb.append(")")

        end_block = node.body.end_block
        statements = end_block.statements if end_block is not None else ()
        traps = end_block.traps if end_block is not None else ()

        if node.is_constructor:
            base_call = _leading_base_ctor_call(statements)
            if base_call is not None:
                if base_call.arguments:
                    sb.append(" : ")
                    self._render(base_call, ctx)
                statements = statements[1:]

        self._write_body_parts(statements, traps, ctx)

    def _render_using_statement(self, node: UsingStatement, ctx: RenderContext) -> None:
        sb = ctx.sb
        keyword = _USING_KEYWORDS.get(node.kind)
        if keyword is None:
            raise UnsupportedConstructError(node.kind, f"Unknown using statement kind: {node.kind!r}")

        sb.append(token_text(TokenKind.USING)).append(" ").append(keyword).append(" ")

        if node.module_specification is not None:
            sb.append("@{ ")
            self._intersperse_with(
                node.module_specification.key_value_pairs,
                lambda pair: self._write_hashtable_entry(pair, ctx),
                lambda: sb.append("; "),
            )
            sb.append(" }")
            return

        if node.name is not None:
            self._render(node.name, ctx)

        if node.alias is not None:
            sb.append(" = ")
            self._render(node.alias, ctx)

    # =========================================================================
    # Expressions
    # =========================================================================

    def _render_constant(self, node: ConstantExpression, ctx: RenderContext) -> None:
        value = node.value
        if value is None:
            ctx.sb.append("$null")
        elif isinstance(value, bool):
            ctx.sb.append("$true" if value else "$false")
        else:
            ctx.sb.append(str(value))

    def _render_string_constant(self, node: StringConstantExpression, ctx: RenderContext) -> None:
        sb = ctx.sb
        match node.string_type:
            case StringConstantType.BARE_WORD:
                sb.append(node.value)
            case StringConstantType.SINGLE_QUOTED:
                sb.append(quote_single(node.value))
            case StringConstantType.DOUBLE_QUOTED:
                sb.append(quote_double(node.value))
            case StringConstantType.SINGLE_QUOTED_HERE_STRING:
                sb.append(here_string(node.value, expandable=False, newline=ctx.config.newline))
            case StringConstantType.DOUBLE_QUOTED_HERE_STRING:
                sb.append(here_string(node.value, expandable=True, newline=ctx.config.newline))
            case _:
                raise UnsupportedConstructError(
                    node.string_type, f"Bad string constant expression of type {node.string_type!r}"
                )

    def _render_expandable_string(self, node: ExpandableStringExpression, ctx: RenderContext) -> None:
        """Render an expandable string from its raw text, unescaped."""
        match node.string_type:
            case StringConstantType.DOUBLE_QUOTED:
                ctx.sb.append('"').append(node.value).append('"')
            case StringConstantType.DOUBLE_QUOTED_HERE_STRING:
                ctx.sb.append(here_string(node.value, expandable=True, newline=ctx.config.newline))
            case _:
                raise UnsupportedConstructError(
                    node.string_type, f"Bad expandable string expression of type {node.string_type!r}"
                )

    def _render_unary(self, node: UnaryExpression, ctx: RenderContext) -> None:
        sb = ctx.sb
        if node.operator in _PREFIX_OPERATORS:
            sb.append(token_text(node.operator))
            self._render(node.child, ctx)
        elif node.operator in _POSTFIX_OPERATORS:
            self._render(node.child, ctx)
            sb.append(token_text(node.operator))
        else:
            sb.append(token_text(node.operator)).append(" ")
            self._render(node.child, ctx)

    def _render_hashtable(self, node: Hashtable, ctx: RenderContext) -> None:
        """Render ``@{`` with one ``key = value`` entry per indented line."""
        sb = ctx.sb
        sb.append("@{")
        if not node.key_value_pairs:
            sb.append("}")
            return

        sb.indent()
        self._intersperse_with(
            node.key_value_pairs,
            lambda pair: self._write_hashtable_entry(pair, ctx),
            sb.newline,
        )
        sb.dedent().append("}")

    def _write_hashtable_entry(self, entry: tuple[Node, Node], ctx: RenderContext) -> None:
        key, value = entry
        self._render(key, ctx)
        ctx.sb.append(" = ")
        self._render(value, ctx)

    # =========================================================================
    # Blocks and statement lists
    # =========================================================================

    def _write_body(self, block: StatementBlock, ctx: RenderContext) -> None:
        self._write_body_parts(block.statements, block.traps, ctx)

    def _write_body_parts(
        self,
        statements: Sequence[Node],
        traps: Sequence[TrapStatement],
        ctx: RenderContext,
    ) -> None:
        """Write a brace-delimited body on the lines after the current one."""
        if not statements and not traps:
            self._write_empty_block(ctx)
            return
        self._begin_block(ctx)
        self._write_statements(statements, traps, ctx)
        self._end_block(ctx)

    def _write_statements(
        self,
        statements: Sequence[Node],
        traps: Sequence[TrapStatement],
        ctx: RenderContext,
    ) -> None:
        """Write traps, then statements, one per line.

        A statement that follows a block-shaped statement is preceded by a
        blank line.
        """
        sb = ctx.sb
        self._intersperse_with(traps, lambda trap: self._render(trap, ctx), sb.newline)

        previous: Node | None = None
        for statement in statements:
            if previous is not None:
                sb.newline(2 if is_block_shaped(previous) else 1)
            elif traps:
                sb.newline()
            self._render(statement, ctx)
            previous = statement

    def _begin_block(self, ctx: RenderContext) -> None:
        ctx.sb.newline().append("{").indent()

    def _end_block(self, ctx: RenderContext) -> None:
        ctx.sb.dedent().append("}")

    def _write_empty_block(self, ctx: RenderContext) -> None:
        ctx.sb.newline().append("{").newline().append("}")

    # =========================================================================
    # Helpers
    # =========================================================================

    def _intersperse(self, nodes: Sequence[Node], separator: str, ctx: RenderContext) -> None:
        """Render nodes with a fixed separator between them."""
        for i, node in enumerate(nodes):
            if i:
                ctx.sb.append(separator)
            self._render(node, ctx)

    @staticmethod
    def _intersperse_with[T](
        items: Sequence[T],
        write_item: Callable[[T], object],
        write_separator: Callable[[], object],
    ) -> None:
        """Write items, calling write_separator between consecutive ones."""
        for i, item in enumerate(items):
            if i:
                write_separator()
            write_item(item)


def _is_empty_script_block(node: ScriptBlock) -> bool:
    end_block = node.end_block
    return (
        not node.using_statements
        and node.param_block is None
        and node.dynamic_param_block is None
        and node.begin_block is None
        and node.process_block is None
        and (end_block is None or (not end_block.statements and not end_block.traps))
    )


def _leading_base_ctor_call(statements: Sequence[Node]) -> BaseCtorInvokeMemberExpression | None:
    """Find the base-constructor call at the start of a constructor body.

    Parsers emit it either as a bare command expression statement or
    wrapped in a single-element pipeline.
    """
    if not statements:
        return None
    first = statements[0]
    if isinstance(first, Pipeline) and len(first.elements) == 1:
        first = first.elements[0]
    if isinstance(first, CommandExpression) and isinstance(first.expression, BaseCtorInvokeMemberExpression):
        return first.expression
    return None
