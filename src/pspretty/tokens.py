"""Token and TokenKind definitions.

The external parser produces a stream of Token objects alongside the tree.
Nodes refer to operators and keywords by TokenKind (an assignment carries
``TokenKind.PLUS_EQUALS``, a binary expression ``TokenKind.CEQ``), and the
renderer turns a kind into its surface text through ``pspretty.spelling``.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenKind is an enum (inherently immutable).

"""

from dataclasses import dataclass, field
from enum import Enum, auto

from pspretty.location import UNKNOWN_LOCATION, SourceLocation


class TokenKind(Enum):
    """Token kinds a PowerShell parser can classify.

    Organized by category:
    - Lexical kinds with no canonical spelling (variables, literals, comments)
    - Punctuation and grouping
    - Arithmetic, assignment and increment operators
    - Comparison, logical, bitwise and type operators
    - Keywords

    Operators prefixed ``I`` are case-insensitive, ``C`` case-sensitive.

    """

    # Lexical kinds (no canonical spelling)
    UNKNOWN = auto()
    VARIABLE = auto()
    SPLATTED_VARIABLE = auto()
    PARAMETER = auto()
    NUMBER = auto()
    LABEL = auto()
    IDENTIFIER = auto()
    GENERIC = auto()
    COMMENT = auto()
    STRING_LITERAL = auto()
    STRING_EXPANDABLE = auto()
    HERE_STRING_LITERAL = auto()
    HERE_STRING_EXPANDABLE = auto()
    LINE_CONTINUATION = auto()
    END_OF_INPUT = auto()

    # Punctuation and grouping
    NEW_LINE = auto()
    L_PAREN = auto()
    R_PAREN = auto()
    L_CURLY = auto()
    R_CURLY = auto()
    L_BRACKET = auto()
    R_BRACKET = auto()
    AT_PAREN = auto()  # @(
    AT_CURLY = auto()  # @{
    DOLLAR_PAREN = auto()  # $(
    SEMI = auto()
    COMMA = auto()
    DOT = auto()
    DOT_DOT = auto()
    COLON = auto()
    COLON_COLON = auto()
    PIPE = auto()
    AMPERSAND = auto()
    AND_AND = auto()  # &&
    OR_OR = auto()  # ||
    QUESTION_MARK = auto()
    QUESTION_QUESTION = auto()  # ??
    QUESTION_DOT = auto()  # ?.
    QUESTION_L_BRACKET = auto()  # ?[

    # Arithmetic and assignment
    EQUALS = auto()
    PLUS = auto()
    MINUS = auto()
    MULTIPLY = auto()
    DIVIDE = auto()
    REM = auto()
    PLUS_EQUALS = auto()
    MINUS_EQUALS = auto()
    MULTIPLY_EQUALS = auto()
    DIVIDE_EQUALS = auto()
    REMAINDER_EQUALS = auto()
    QUESTION_QUESTION_EQUALS = auto()  # ??=
    PLUS_PLUS = auto()
    MINUS_MINUS = auto()
    POSTFIX_PLUS_PLUS = auto()
    POSTFIX_MINUS_MINUS = auto()
    EXCLAIM = auto()
    FORMAT = auto()  # -f

    # Logical and bitwise
    AND = auto()
    OR = auto()
    XOR = auto()
    NOT = auto()
    BAND = auto()
    BOR = auto()
    BXOR = auto()
    BNOT = auto()
    SHL = auto()
    SHR = auto()

    # Comparison (case-insensitive)
    IEQ = auto()
    INE = auto()
    IGE = auto()
    IGT = auto()
    ILT = auto()
    ILE = auto()
    ILIKE = auto()
    INOTLIKE = auto()
    IMATCH = auto()
    INOTMATCH = auto()
    IREPLACE = auto()
    ICONTAINS = auto()
    INOTCONTAINS = auto()
    IIN = auto()
    INOTIN = auto()
    ISPLIT = auto()

    # Comparison (case-sensitive)
    CEQ = auto()
    CNE = auto()
    CGE = auto()
    CGT = auto()
    CLT = auto()
    CLE = auto()
    CLIKE = auto()
    CNOTLIKE = auto()
    CMATCH = auto()
    CNOTMATCH = auto()
    CREPLACE = auto()
    CCONTAINS = auto()
    CNOTCONTAINS = auto()
    CIN = auto()
    CNOTIN = auto()
    CSPLIT = auto()

    # Type and string operators
    IS = auto()
    IS_NOT = auto()
    AS = auto()
    JOIN = auto()
    IN = auto()

    # Keywords
    BEGIN = auto()
    BREAK = auto()
    CATCH = auto()
    CLASS = auto()
    CONTINUE = auto()
    DATA = auto()
    DEFINE = auto()
    DO = auto()
    DYNAMICPARAM = auto()
    ELSE = auto()
    ELSE_IF = auto()
    END = auto()
    EXIT = auto()
    FILTER = auto()
    FINALLY = auto()
    FOR = auto()
    FOREACH = auto()
    FROM = auto()
    FUNCTION = auto()
    IF = auto()
    PARAM = auto()
    PROCESS = auto()
    RETURN = auto()
    SWITCH = auto()
    THROW = auto()
    TRAP = auto()
    TRY = auto()
    UNTIL = auto()
    USING = auto()
    VAR = auto()
    WHILE = auto()
    WORKFLOW = auto()
    PARALLEL = auto()
    SEQUENCE = auto()
    INLINE_SCRIPT = auto()
    CONFIGURATION = auto()
    PUBLIC = auto()
    PRIVATE = auto()
    STATIC = auto()
    INTERFACE = auto()
    ENUM = auto()
    NAMESPACE = auto()
    MODULE = auto()
    ASSEMBLY = auto()
    HIDDEN = auto()
    BASE = auto()


@dataclass(frozen=True, slots=True)
class Token:
    """A classified lexical unit from the external lexer.

    Attributes:
        kind: The token kind
        text: The raw text the token was lexed from
        location: Where the token appeared

    """

    kind: TokenKind
    text: str = ""
    location: SourceLocation = field(default=UNKNOWN_LOCATION, compare=False)

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        text = self.text
        if len(text) > 20:
            text = text[:17] + "..."
        return f"Token({self.kind.name}, {text!r}, {self.location})"
