"""Canonical surface spellings for token kinds and redirection streams.

Both tables are plain dicts built once at import time. A kind missing from
``TOKEN_SPELLINGS`` (variables, literals, comments and the other lexical
kinds that have no fixed text) is an unsupported construct for the renderer.

Example:
    >>> from pspretty.spelling import token_text
    >>> from pspretty.tokens import TokenKind
    >>> token_text(TokenKind.CEQ)
    '-ceq'
"""

import os
from types import MappingProxyType

from pspretty.errors import UnsupportedConstructError
from pspretty.nodes import RedirectionStream
from pspretty.tokens import TokenKind

TOKEN_SPELLINGS: MappingProxyType[TokenKind, str] = MappingProxyType(
    {
        # Punctuation and grouping
        TokenKind.NEW_LINE: os.linesep,
        TokenKind.L_PAREN: "(",
        TokenKind.R_PAREN: ")",
        TokenKind.L_CURLY: "{",
        TokenKind.R_CURLY: "}",
        TokenKind.L_BRACKET: "[",
        TokenKind.R_BRACKET: "]",
        TokenKind.AT_PAREN: "@(",
        TokenKind.AT_CURLY: "@{",
        TokenKind.DOLLAR_PAREN: "$(",
        TokenKind.SEMI: ";",
        TokenKind.COMMA: ",",
        TokenKind.DOT: ".",
        TokenKind.DOT_DOT: "..",
        TokenKind.COLON: ":",
        TokenKind.COLON_COLON: "::",
        TokenKind.PIPE: "|",
        TokenKind.AMPERSAND: "&",
        TokenKind.AND_AND: "&&",
        TokenKind.OR_OR: "||",
        TokenKind.QUESTION_MARK: "?",
        TokenKind.QUESTION_QUESTION: "??",
        TokenKind.QUESTION_DOT: "?.",
        TokenKind.QUESTION_L_BRACKET: "?[",
        # Arithmetic and assignment
        TokenKind.EQUALS: "=",
        TokenKind.PLUS: "+",
        TokenKind.MINUS: "-",
        TokenKind.MULTIPLY: "*",
        TokenKind.DIVIDE: "/",
        TokenKind.REM: "%",
        TokenKind.PLUS_EQUALS: "+=",
        TokenKind.MINUS_EQUALS: "-=",
        TokenKind.MULTIPLY_EQUALS: "*=",
        TokenKind.DIVIDE_EQUALS: "/=",
        TokenKind.REMAINDER_EQUALS: "%=",
        TokenKind.QUESTION_QUESTION_EQUALS: "??=",
        TokenKind.PLUS_PLUS: "++",
        TokenKind.MINUS_MINUS: "--",
        TokenKind.POSTFIX_PLUS_PLUS: "++",
        TokenKind.POSTFIX_MINUS_MINUS: "--",
        TokenKind.EXCLAIM: "!",
        TokenKind.FORMAT: "-f",
        # Logical and bitwise
        TokenKind.AND: "-and",
        TokenKind.OR: "-or",
        TokenKind.XOR: "-xor",
        TokenKind.NOT: "-not",
        TokenKind.BAND: "-band",
        TokenKind.BOR: "-bor",
        TokenKind.BXOR: "-bxor",
        TokenKind.BNOT: "-bnot",
        TokenKind.SHL: "-shl",
        TokenKind.SHR: "-shr",
        # Comparison (case-insensitive)
        TokenKind.IEQ: "-eq",
        TokenKind.INE: "-ne",
        TokenKind.IGE: "-ge",
        TokenKind.IGT: "-gt",
        TokenKind.ILT: "-lt",
        TokenKind.ILE: "-le",
        TokenKind.ILIKE: "-like",
        TokenKind.INOTLIKE: "-notlike",
        TokenKind.IMATCH: "-match",
        TokenKind.INOTMATCH: "-notmatch",
        TokenKind.IREPLACE: "-replace",
        TokenKind.ICONTAINS: "-contains",
        TokenKind.INOTCONTAINS: "-notcontains",
        TokenKind.IIN: "-in",
        TokenKind.INOTIN: "-notin",
        TokenKind.ISPLIT: "-split",
        # Comparison (case-sensitive)
        TokenKind.CEQ: "-ceq",
        TokenKind.CNE: "-cne",
        TokenKind.CGE: "-cge",
        TokenKind.CGT: "-cgt",
        TokenKind.CLT: "-clt",
        TokenKind.CLE: "-cle",
        TokenKind.CLIKE: "-clike",
        TokenKind.CNOTLIKE: "-cnotlike",
        TokenKind.CMATCH: "-cmatch",
        TokenKind.CNOTMATCH: "-cnotmatch",
        TokenKind.CREPLACE: "-creplace",
        TokenKind.CCONTAINS: "-ccontains",
        TokenKind.CNOTCONTAINS: "-cnotcontains",
        TokenKind.CIN: "-cin",
        TokenKind.CNOTIN: "-cnotin",
        TokenKind.CSPLIT: "-csplit",
        # Type and string operators
        TokenKind.IS: "-is",
        TokenKind.IS_NOT: "-isnot",
        TokenKind.AS: "-as",
        TokenKind.JOIN: "-join",
        TokenKind.IN: "-in",
        # Keywords
        TokenKind.BEGIN: "begin",
        TokenKind.BREAK: "break",
        TokenKind.CATCH: "catch",
        TokenKind.CLASS: "class",
        TokenKind.CONTINUE: "continue",
        TokenKind.DATA: "data",
        TokenKind.DEFINE: "define",
        TokenKind.DO: "do",
        TokenKind.DYNAMICPARAM: "dynamicparam",
        TokenKind.ELSE: "else",
        TokenKind.ELSE_IF: "elseif",
        TokenKind.END: "end",
        TokenKind.EXIT: "exit",
        TokenKind.FILTER: "filter",
        TokenKind.FINALLY: "finally",
        TokenKind.FOR: "for",
        TokenKind.FOREACH: "foreach",
        TokenKind.FROM: "from",
        TokenKind.FUNCTION: "function",
        TokenKind.IF: "if",
        TokenKind.PARAM: "param",
        TokenKind.PROCESS: "process",
        TokenKind.RETURN: "return",
        TokenKind.SWITCH: "switch",
        TokenKind.THROW: "throw",
        TokenKind.TRAP: "trap",
        TokenKind.TRY: "try",
        TokenKind.UNTIL: "until",
        TokenKind.USING: "using",
        TokenKind.VAR: "var",
        TokenKind.WHILE: "while",
        TokenKind.WORKFLOW: "workflow",
        TokenKind.PARALLEL: "parallel",
        TokenKind.SEQUENCE: "sequence",
        TokenKind.INLINE_SCRIPT: "inlinescript",
        TokenKind.CONFIGURATION: "configuration",
        TokenKind.PUBLIC: "public",
        TokenKind.PRIVATE: "private",
        TokenKind.STATIC: "static",
        TokenKind.INTERFACE: "interface",
        TokenKind.ENUM: "enum",
        TokenKind.NAMESPACE: "namespace",
        TokenKind.MODULE: "module",
        TokenKind.ASSEMBLY: "assembly",
        TokenKind.HIDDEN: "hidden",
        TokenKind.BASE: "base",
    }
)

# Stream number used before ``>`` and around ``>&``
STREAM_INDICATORS: MappingProxyType[RedirectionStream, str] = MappingProxyType(
    {
        RedirectionStream.ALL: "*",
        RedirectionStream.OUTPUT: "1",
        RedirectionStream.ERROR: "2",
        RedirectionStream.WARNING: "3",
        RedirectionStream.VERBOSE: "4",
        RedirectionStream.DEBUG: "5",
        RedirectionStream.INFORMATION: "6",
    }
)


def token_text(kind: TokenKind) -> str:
    """Return the canonical spelling of an operator or keyword.

    Raises:
        UnsupportedConstructError: If the kind has no fixed spelling.
    """
    try:
        return TOKEN_SPELLINGS[kind]
    except KeyError:
        raise UnsupportedConstructError(kind, f"Unable to stringify token kind {kind.name}") from None


def stream_indicator(stream: RedirectionStream) -> str:
    """Return the digit (or ``*``) naming a redirection stream."""
    try:
        return STREAM_INDICATORS[stream]
    except KeyError:
        raise UnsupportedConstructError(stream, f"Unknown redirection stream: {stream!r}") from None
