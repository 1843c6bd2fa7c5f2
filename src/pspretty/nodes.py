"""Typed AST nodes for pspretty.

All AST nodes are frozen dataclasses with slots for:
- Type safety: IDE autocomplete, catch errors at dev time
- Immutability: Safe sharing across threads
- Memory efficiency: __slots__ reduces memory footprint
- Pattern matching: the renderer dispatches with a single match statement

Fields are keyword-only so trees read naturally when built by hand or by
``pspretty.serialization``.

Node Hierarchy:
Node (base)
├── Script structure
│   ├── ScriptBlock, NamedBlock, StatementBlock
│   └── ParamBlock, Parameter
├── Attributes
│   ├── Attribute, TypeConstraint
│   └── NamedAttributeArgument
├── Statements
│   ├── Pipeline, PipelineChain, AssignmentStatement
│   ├── Command, CommandExpression, CommandParameter
│   ├── IfStatement, SwitchStatement, TryStatement, CatchClause, TrapStatement
│   ├── WhileStatement, DoWhileStatement, DoUntilStatement
│   ├── ForStatement, ForEachStatement
│   ├── BreakStatement, ContinueStatement, ReturnStatement
│   ├── ExitStatement, ThrowStatement
│   ├── FunctionDefinition, TypeDefinition, UsingStatement
│   └── PropertyMember, FunctionMember
├── Expressions
│   ├── ConstantExpression, StringConstantExpression
│   ├── ExpandableStringExpression, VariableExpression, UsingExpression
│   ├── BinaryExpression, UnaryExpression, TernaryExpression
│   ├── ConvertExpression, AttributedExpression, TypeExpression
│   ├── MemberExpression, InvokeMemberExpression, BaseCtorInvokeMemberExpression
│   ├── IndexExpression, ArrayLiteral, ArrayExpression, SubExpression
│   └── ParenExpression, Hashtable, ScriptBlockExpression
├── Redirections
│   └── FileRedirection, MergingRedirection
└── No formatting rule (rendering fails)
    ├── BlockStatement, DataStatement, ConfigurationDefinition
    └── DynamicKeywordStatement, ErrorStatement, ErrorExpression

Type names (TypeName, ArrayTypeName, GenericTypeName) are plain frozen
values rather than nodes; they appear inside attributes, type constraints
and type expressions.

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, Flag, auto

from pspretty.location import UNKNOWN_LOCATION, SourceLocation
from pspretty.tokens import TokenKind

# =============================================================================
# Enums
# =============================================================================


class StringConstantType(Enum):
    """How a string literal was quoted in the source."""

    BARE_WORD = auto()
    SINGLE_QUOTED = auto()
    DOUBLE_QUOTED = auto()
    SINGLE_QUOTED_HERE_STRING = auto()
    DOUBLE_QUOTED_HERE_STRING = auto()


class RedirectionStream(Enum):
    """Output streams that can be redirected."""

    ALL = auto()
    OUTPUT = auto()
    ERROR = auto()
    WARNING = auto()
    VERBOSE = auto()
    DEBUG = auto()
    INFORMATION = auto()


class UsingStatementKind(Enum):
    """Sub-kinds of ``using`` statements."""

    ASSEMBLY = auto()
    COMMAND = auto()
    MODULE = auto()
    NAMESPACE = auto()
    TYPE = auto()


class TypeKind(Enum):
    """Kinds of user-defined types."""

    CLASS = auto()
    INTERFACE = auto()
    ENUM = auto()


class SwitchFlags(Flag):
    """Matching options written between ``switch`` and its condition."""

    NONE = 0
    REGEX = auto()
    WILDCARD = auto()
    EXACT = auto()
    CASE_SENSITIVE = auto()
    FILE = auto()


# =============================================================================
# Type names
# =============================================================================


@dataclass(frozen=True, slots=True)
class TypeName:
    """A simple or namespace-qualified type name.

    PowerShell: [string], [System.IO.FileInfo]
    """

    name: str


@dataclass(frozen=True, slots=True)
class ArrayTypeName:
    """An array of an element type.

    PowerShell: [int[]], [string[,]]
    """

    element_type: AnyTypeName
    rank: int = 1


@dataclass(frozen=True, slots=True)
class GenericTypeName:
    """A generic type closed over type arguments.

    PowerShell: [System.Collections.Generic.Dictionary[string, int]]
    """

    type_name: TypeName
    generic_arguments: tuple[AnyTypeName, ...]


type AnyTypeName = TypeName | ArrayTypeName | GenericTypeName


# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True, kw_only=True)
class Node:
    """Base class for all AST nodes.

    All nodes track their source location for error messages and debugging.

    """

    location: SourceLocation = UNKNOWN_LOCATION


# =============================================================================
# Script structure
# =============================================================================


@dataclass(frozen=True, slots=True, kw_only=True)
class ScriptBlock(Node):
    """A script, function body or ``{ ... }`` literal.

    The root of every parsed script is a ScriptBlock; it renders without
    braces. Nested script blocks render inside ``{`` and ``}``.

    """

    using_statements: tuple[UsingStatement, ...] = ()
    param_block: ParamBlock | None = None
    dynamic_param_block: NamedBlock | None = None
    begin_block: NamedBlock | None = None
    process_block: NamedBlock | None = None
    end_block: NamedBlock | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NamedBlock(Node):
    """A ``begin``/``process``/``end``/``dynamicparam`` block.

    ``unnamed`` marks the implicit end block of a script that has no
    explicit named blocks.

    """

    block_kind: TokenKind = TokenKind.END
    statements: tuple[Statement, ...] = ()
    traps: tuple[TrapStatement, ...] = ()
    unnamed: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class StatementBlock(Node):
    """A brace-delimited statement list (bodies of if, loops, try...)."""

    statements: tuple[Statement, ...] = ()
    traps: tuple[TrapStatement, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class ParamBlock(Node):
    """PowerShell: [CmdletBinding()] param($a, $b)"""

    attributes: tuple[Attribute, ...] = ()
    parameters: tuple[Parameter, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class Parameter(Node):
    """PowerShell: [Parameter(Mandatory)][string]$Name = 'x'"""

    name: VariableExpression
    attributes: tuple[AttributeBase, ...] = ()
    default_value: Expression | None = None


# =============================================================================
# Attributes
# =============================================================================


@dataclass(frozen=True, slots=True, kw_only=True)
class Attribute(Node):
    """PowerShell: [ValidateRange(1, 10, ErrorMessage = 'x')]"""

    type_name: AnyTypeName
    positional_arguments: tuple[Expression, ...] = ()
    named_arguments: tuple[NamedAttributeArgument, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class TypeConstraint(Node):
    """PowerShell: [int] in front of a parameter or variable."""

    type_name: AnyTypeName


@dataclass(frozen=True, slots=True, kw_only=True)
class NamedAttributeArgument(Node):
    """PowerShell: Mandatory, or Position = 0

    ``expression_omitted`` is set for switch-style arguments written
    without a value.

    """

    argument_name: str
    argument: Expression | None = None
    expression_omitted: bool = False


type AttributeBase = Attribute | TypeConstraint


# =============================================================================
# Pipelines and commands
# =============================================================================


@dataclass(frozen=True, slots=True, kw_only=True)
class Pipeline(Node):
    """PowerShell: Get-Item . | Select-Object Name"""

    elements: tuple[CommandBase, ...]
    background: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class PipelineChain(Node):
    """PowerShell: Build && Test || Report"""

    left: Pipeline | PipelineChain
    operator: TokenKind
    right: Pipeline
    background: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class AssignmentStatement(Node):
    """PowerShell: $x += 1"""

    left: Expression
    right: Statement
    operator: TokenKind = TokenKind.EQUALS


@dataclass(frozen=True, slots=True, kw_only=True)
class Command(Node):
    """A command invocation.

    PowerShell: & $tool -Verbose arg 2>&1

    ``invocation_operator`` is ``TokenKind.AMPERSAND`` or ``TokenKind.DOT``
    when the command is called with ``&`` or dot-sourced.

    """

    elements: tuple[CommandElement, ...]
    invocation_operator: TokenKind | None = None
    redirections: tuple[Redirection, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class CommandExpression(Node):
    """An expression used as a pipeline element."""

    expression: Expression
    redirections: tuple[Redirection, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class CommandParameter(Node):
    """PowerShell: -Path, or -Recurse:$false"""

    name: str
    argument: Expression | None = None


# =============================================================================
# Redirections
# =============================================================================


@dataclass(frozen=True, slots=True, kw_only=True)
class FileRedirection(Node):
    """PowerShell: > out.txt, 2>> errors.log"""

    target: Expression
    from_stream: RedirectionStream = RedirectionStream.OUTPUT
    append: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class MergingRedirection(Node):
    """PowerShell: 2>&1"""

    from_stream: RedirectionStream = RedirectionStream.ERROR
    to_stream: RedirectionStream = RedirectionStream.OUTPUT


type Redirection = FileRedirection | MergingRedirection


# =============================================================================
# Control flow
# =============================================================================


@dataclass(frozen=True, slots=True, kw_only=True)
class IfStatement(Node):
    """PowerShell: if (...) {...} elseif (...) {...} else {...}

    ``clauses`` pairs each condition with its body; the first pair is the
    ``if`` clause and the rest are ``elseif`` clauses.

    """

    clauses: tuple[tuple[Statement, StatementBlock], ...]
    else_clause: StatementBlock | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class WhileStatement(Node):
    """PowerShell: while ($i -lt 10) {...}"""

    condition: Statement
    body: StatementBlock
    label: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class DoWhileStatement(Node):
    """PowerShell: do {...} while ($running)"""

    condition: Statement
    body: StatementBlock
    label: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class DoUntilStatement(Node):
    """PowerShell: do {...} until ($done)"""

    condition: Statement
    body: StatementBlock
    label: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ForStatement(Node):
    """PowerShell: for ($i = 0; $i -lt 10; $i++) {...}"""

    body: StatementBlock
    initializer: Statement | None = None
    condition: Statement | None = None
    iterator: Statement | None = None
    label: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ForEachStatement(Node):
    """PowerShell: foreach ($item in $items) {...}"""

    variable: VariableExpression
    condition: Statement
    body: StatementBlock
    label: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class SwitchStatement(Node):
    """PowerShell: switch -regex ($x) { 'a' {...} default {...} }"""

    condition: Statement
    clauses: tuple[tuple[Expression, StatementBlock], ...] = ()
    default: StatementBlock | None = None
    label: str | None = None
    flags: SwitchFlags = SwitchFlags.NONE


@dataclass(frozen=True, slots=True, kw_only=True)
class CatchClause(Node):
    """PowerShell: catch [System.IO.IOException] {...}"""

    body: StatementBlock
    catch_types: tuple[TypeConstraint, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class TryStatement(Node):
    """PowerShell: try {...} catch {...} finally {...}"""

    body: StatementBlock
    catch_clauses: tuple[CatchClause, ...] = ()
    finally_block: StatementBlock | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class TrapStatement(Node):
    """PowerShell: trap [Exception] {...}"""

    body: StatementBlock
    trap_type: TypeConstraint | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class BreakStatement(Node):
    """PowerShell: break, or break outer"""

    label: Expression | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ContinueStatement(Node):
    """PowerShell: continue, or continue outer"""

    label: Expression | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ReturnStatement(Node):
    """PowerShell: return $result"""

    pipeline: Statement | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ExitStatement(Node):
    """PowerShell: exit 1"""

    pipeline: Statement | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ThrowStatement(Node):
    """PowerShell: throw 'failed'"""

    pipeline: Statement | None = None


# =============================================================================
# Definitions
# =============================================================================


@dataclass(frozen=True, slots=True, kw_only=True)
class FunctionDefinition(Node):
    """PowerShell: function Get-Thing($a) {...} or filter Keep {...}

    ``parameters`` holds parameters declared inline after the name; a
    ``param()`` block lives on the body instead.

    """

    name: str
    body: ScriptBlock
    parameters: tuple[Parameter, ...] = ()
    is_filter: bool = False
    is_workflow: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class PropertyMember(Node):
    """A class property or an enum member.

    PowerShell: hidden static [int]$Count = 0
    """

    name: str
    property_type: TypeConstraint | None = None
    initial_value: Expression | None = None
    is_static: bool = False
    is_hidden: bool = False
    attributes: tuple[Attribute, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class FunctionMember(Node):
    """A class method or constructor.

    Constructor bodies start with an implicit or explicit base-constructor
    call (a ``BaseCtorInvokeMemberExpression`` statement), as parsers
    produce them.

    """

    name: str
    body: ScriptBlock
    parameters: tuple[Parameter, ...] = ()
    return_type: TypeConstraint | None = None
    is_static: bool = False
    is_hidden: bool = False
    is_constructor: bool = False
    attributes: tuple[Attribute, ...] = ()


type Member = PropertyMember | FunctionMember


@dataclass(frozen=True, slots=True, kw_only=True)
class TypeDefinition(Node):
    """PowerShell: class Dog : Animal {...} or enum Color {...}"""

    name: str
    kind: TypeKind = TypeKind.CLASS
    members: tuple[Member, ...] = ()
    base_types: tuple[TypeConstraint, ...] = ()
    attributes: tuple[Attribute, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class UsingStatement(Node):
    """PowerShell: using namespace System.Text

    Module imports may use a module specification hashtable instead of
    a name: ``using module @{ ModuleName = 'x'; ModuleVersion = '1.0' }``.

    """

    kind: UsingStatementKind
    name: StringConstantExpression | None = None
    alias: StringConstantExpression | None = None
    module_specification: Hashtable | None = None


# =============================================================================
# Expressions
# =============================================================================


@dataclass(frozen=True, slots=True, kw_only=True)
class ConstantExpression(Node):
    """A number, boolean or null literal."""

    value: int | float | bool | str | None


@dataclass(frozen=True, slots=True, kw_only=True)
class StringConstantExpression(Node):
    """A non-expanding string literal or bare word.

    ``value`` is the literal's value, with quoting and escapes removed.

    """

    value: str
    string_type: StringConstantType = StringConstantType.BARE_WORD


@dataclass(frozen=True, slots=True, kw_only=True)
class ExpandableStringExpression(Node):
    """A double-quoted string with embedded variables or sub-expressions.

    ``value`` is the string as written between the quotes, variable
    references included.

    """

    value: str
    string_type: StringConstantType = StringConstantType.DOUBLE_QUOTED
    nested_expressions: tuple[Expression, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class VariableExpression(Node):
    """PowerShell: $env:PATH, or @params when splatted"""

    name: str
    splatted: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class UsingExpression(Node):
    """PowerShell: $using:name"""

    sub_expression: Expression


@dataclass(frozen=True, slots=True, kw_only=True)
class BinaryExpression(Node):
    """PowerShell: $a -ceq $b"""

    left: Expression
    operator: TokenKind
    right: Expression


@dataclass(frozen=True, slots=True, kw_only=True)
class UnaryExpression(Node):
    """PowerShell: -not $x, ++$i, $i--"""

    operator: TokenKind
    child: Expression


@dataclass(frozen=True, slots=True, kw_only=True)
class TernaryExpression(Node):
    """PowerShell: $ok ? 'yes' : 'no'"""

    condition: Expression
    if_true: Expression
    if_false: Expression


@dataclass(frozen=True, slots=True, kw_only=True)
class ConvertExpression(Node):
    """PowerShell: [int]$text"""

    type_constraint: TypeConstraint
    child: Expression


@dataclass(frozen=True, slots=True, kw_only=True)
class AttributedExpression(Node):
    """PowerShell: [ValidateNotNull()]$x"""

    attribute: Attribute
    child: Expression


@dataclass(frozen=True, slots=True, kw_only=True)
class TypeExpression(Node):
    """PowerShell: [System.Math]"""

    type_name: AnyTypeName


@dataclass(frozen=True, slots=True, kw_only=True)
class MemberExpression(Node):
    """PowerShell: $file.Length, or [Math]::PI when static"""

    expression: Expression
    member: Expression
    static: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class InvokeMemberExpression(Node):
    """PowerShell: $list.Add($item), or [Math]::Max(1, 2) when static"""

    expression: Expression
    member: Expression
    arguments: tuple[Expression, ...] = ()
    static: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class BaseCtorInvokeMemberExpression(Node):
    """The base-class constructor call opening a constructor body."""

    arguments: tuple[Expression, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class IndexExpression(Node):
    """PowerShell: $items[0]"""

    target: Expression
    index: Expression


@dataclass(frozen=True, slots=True, kw_only=True)
class ArrayLiteral(Node):
    """PowerShell: 1, 2, 3"""

    elements: tuple[Expression, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class ArrayExpression(Node):
    """PowerShell: @(Get-ChildItem)"""

    sub_expression: StatementBlock


@dataclass(frozen=True, slots=True, kw_only=True)
class SubExpression(Node):
    """PowerShell: $(Get-Date)"""

    sub_expression: StatementBlock


@dataclass(frozen=True, slots=True, kw_only=True)
class ParenExpression(Node):
    """PowerShell: (Get-Item .)"""

    pipeline: Statement


@dataclass(frozen=True, slots=True, kw_only=True)
class Hashtable(Node):
    """PowerShell: @{ Name = 'x'; Count = 1 }"""

    key_value_pairs: tuple[tuple[Expression, Statement], ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class ScriptBlockExpression(Node):
    """PowerShell: { param($x) $x * 2 }"""

    script_block: ScriptBlock


# =============================================================================
# Constructs without a formatting rule
# =============================================================================


@dataclass(frozen=True, slots=True, kw_only=True)
class BlockStatement(Node):
    """Workflow ``parallel``/``sequence`` block."""

    kind: TokenKind
    body: StatementBlock


@dataclass(frozen=True, slots=True, kw_only=True)
class DataStatement(Node):
    """PowerShell: data messages -SupportedCommand X {...}"""

    body: StatementBlock
    variable: str | None = None
    commands_allowed: tuple[Expression, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class ConfigurationDefinition(Node):
    """DSC ``configuration Name {...}``."""

    name: Expression
    body: ScriptBlockExpression


@dataclass(frozen=True, slots=True, kw_only=True)
class DynamicKeywordStatement(Node):
    """A DSC resource or other dynamic keyword invocation."""

    elements: tuple[CommandElement, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class ErrorStatement(Node):
    """Placeholder a parser leaves where a statement failed to parse."""

    nested: tuple[Node, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class ErrorExpression(Node):
    """Placeholder a parser leaves where an expression failed to parse."""

    nested: tuple[Node, ...] = ()


# =============================================================================
# Type aliases
# =============================================================================

type Expression = (
    ConstantExpression
    | StringConstantExpression
    | ExpandableStringExpression
    | VariableExpression
    | UsingExpression
    | BinaryExpression
    | UnaryExpression
    | TernaryExpression
    | ConvertExpression
    | AttributedExpression
    | TypeExpression
    | MemberExpression
    | InvokeMemberExpression
    | BaseCtorInvokeMemberExpression
    | IndexExpression
    | ArrayLiteral
    | ArrayExpression
    | SubExpression
    | ParenExpression
    | Hashtable
    | ScriptBlockExpression
    | ErrorExpression
)

type CommandBase = Command | CommandExpression

type CommandElement = Expression | CommandParameter

type Statement = (
    Pipeline
    | PipelineChain
    | AssignmentStatement
    | Command
    | CommandExpression
    | IfStatement
    | WhileStatement
    | DoWhileStatement
    | DoUntilStatement
    | ForStatement
    | ForEachStatement
    | SwitchStatement
    | TryStatement
    | TrapStatement
    | BreakStatement
    | ContinueStatement
    | ReturnStatement
    | ExitStatement
    | ThrowStatement
    | FunctionDefinition
    | TypeDefinition
    | UsingStatement
    | BlockStatement
    | DataStatement
    | ConfigurationDefinition
    | DynamicKeywordStatement
    | ErrorStatement
)

# Statements written on a single line; every other statement holds a
# brace-delimited body and is followed by a blank line in statement lists.
SINGLE_LINE_STATEMENTS: tuple[type[Node], ...] = (
    Pipeline,
    PipelineChain,
    AssignmentStatement,
    Command,
    CommandExpression,
    ReturnStatement,
    ThrowStatement,
    ExitStatement,
    BreakStatement,
    ContinueStatement,
)


def is_block_shaped(statement: Node) -> bool:
    """Return True if a statement renders with a nested brace-delimited body."""
    return not isinstance(statement, SINGLE_LINE_STATEMENTS)
