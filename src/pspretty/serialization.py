"""AST serialization — JSON round-trip for pspretty AST nodes.

Converts typed AST nodes, type names and tokens to/from JSON-compatible
dicts. Useful for:
- Feeding trees produced by a PowerShell-side dumper into the renderer
- Caching parsed trees to disk
- Debugging and inspection

Enum values serialize by member name (``{"_type": "TokenKind", "name":
"PLUS"}``); flag values as a list of member names. All output is
deterministic (sorted keys).

Example:
    from pspretty.serialization import to_json, from_json

    json_str = to_json(tree)
    restored = from_json(json_str)
    assert tree == restored

Thread Safety:
    All functions are pure — safe to call from any thread.

"""

import json
from dataclasses import fields, is_dataclass
from enum import Enum, Flag
from functools import reduce
from operator import or_
from typing import Any

from pspretty import nodes
from pspretty.location import SourceLocation
from pspretty.nodes import Node
from pspretty.tokens import Token, TokenKind

# Registry of serialized type names to classes for deserialization
_NODE_TYPES: dict[str, type] = {
    cls.__name__: cls
    for cls in (
        nodes.ScriptBlock,
        nodes.NamedBlock,
        nodes.StatementBlock,
        nodes.ParamBlock,
        nodes.Parameter,
        nodes.Attribute,
        nodes.TypeConstraint,
        nodes.NamedAttributeArgument,
        nodes.Pipeline,
        nodes.PipelineChain,
        nodes.AssignmentStatement,
        nodes.Command,
        nodes.CommandExpression,
        nodes.CommandParameter,
        nodes.FileRedirection,
        nodes.MergingRedirection,
        nodes.IfStatement,
        nodes.WhileStatement,
        nodes.DoWhileStatement,
        nodes.DoUntilStatement,
        nodes.ForStatement,
        nodes.ForEachStatement,
        nodes.SwitchStatement,
        nodes.CatchClause,
        nodes.TryStatement,
        nodes.TrapStatement,
        nodes.BreakStatement,
        nodes.ContinueStatement,
        nodes.ReturnStatement,
        nodes.ExitStatement,
        nodes.ThrowStatement,
        nodes.FunctionDefinition,
        nodes.PropertyMember,
        nodes.FunctionMember,
        nodes.TypeDefinition,
        nodes.UsingStatement,
        nodes.ConstantExpression,
        nodes.StringConstantExpression,
        nodes.ExpandableStringExpression,
        nodes.VariableExpression,
        nodes.UsingExpression,
        nodes.BinaryExpression,
        nodes.UnaryExpression,
        nodes.TernaryExpression,
        nodes.ConvertExpression,
        nodes.AttributedExpression,
        nodes.TypeExpression,
        nodes.MemberExpression,
        nodes.InvokeMemberExpression,
        nodes.BaseCtorInvokeMemberExpression,
        nodes.IndexExpression,
        nodes.ArrayLiteral,
        nodes.ArrayExpression,
        nodes.SubExpression,
        nodes.ParenExpression,
        nodes.Hashtable,
        nodes.ScriptBlockExpression,
        nodes.BlockStatement,
        nodes.DataStatement,
        nodes.ConfigurationDefinition,
        nodes.DynamicKeywordStatement,
        nodes.ErrorStatement,
        nodes.ErrorExpression,
        # Values that are not nodes but serialize the same way
        nodes.TypeName,
        nodes.ArrayTypeName,
        nodes.GenericTypeName,
        Token,
    )
}

_ENUM_TYPES: dict[str, type[Enum]] = {
    cls.__name__: cls
    for cls in (
        TokenKind,
        nodes.StringConstantType,
        nodes.RedirectionStream,
        nodes.UsingStatementKind,
        nodes.TypeKind,
        nodes.SwitchFlags,
    )
}


def to_dict(node: Any) -> dict[str, Any]:
    """Convert an AST node (or type name, or token) to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.
    Recursively serializes child nodes, enums and SourceLocation objects.

    Args:
        node: Any pspretty AST node, type name or Token.

    Returns:
        Dict with ``_type`` and all fields.

    Raises:
        ValueError: If the value is not a serializable type.

    """
    type_name = type(node).__name__
    if _NODE_TYPES.get(type_name) is not type(node):
        msg = f"Cannot serialize value of type {type_name!r}"
        raise ValueError(msg)

    result: dict[str, Any] = {"_type": type_name}
    for f in fields(node):
        result[f.name] = _serialize_value(getattr(node, f.name))
    return result


def _serialize_value(value: Any) -> Any:
    """Serialize a single field value."""
    if isinstance(value, SourceLocation):
        return {
            "_type": "SourceLocation",
            "lineno": value.lineno,
            "col_offset": value.col_offset,
            "offset": value.offset,
            "end_offset": value.end_offset,
            "end_lineno": value.end_lineno,
            "end_col_offset": value.end_col_offset,
            "source_file": value.source_file,
        }
    if isinstance(value, Flag):
        return {"_type": type(value).__name__, "names": [member.name for member in value]}
    if isinstance(value, Enum):
        return {"_type": type(value).__name__, "name": value.name}
    if is_dataclass(value) and not isinstance(value, type):
        return to_dict(value)
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    # Primitives: str, int, float, bool, None
    return value


def from_dict(data: dict[str, Any]) -> Any:
    """Reconstruct a typed AST node (or type name, or token) from a dict.

    Uses the ``_type`` discriminator to determine the class.
    Recursively deserializes children; JSON arrays become tuples.

    Args:
        data: Dict with ``_type`` and fields (as produced by to_dict).

    Returns:
        Typed value (frozen dataclass).

    Raises:
        ValueError: If ``_type`` is missing or unknown, or an enum member
            name is unknown.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise ValueError(msg)

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if f.name not in data:
            continue
        kwargs[f.name] = _deserialize_value(data[f.name])

    try:
        return node_cls(**kwargs)
    except TypeError as e:
        msg = f"Invalid fields for {type_name}: {e}"
        raise ValueError(msg) from e


def location_from_dict(value: dict[str, Any]) -> SourceLocation:
    """Reconstruct a SourceLocation from its serialized form."""
    return SourceLocation(
        lineno=value["lineno"],
        col_offset=value["col_offset"],
        offset=value.get("offset", 0),
        end_offset=value.get("end_offset", 0),
        end_lineno=value.get("end_lineno"),
        end_col_offset=value.get("end_col_offset"),
        source_file=value.get("source_file"),
    )


def _deserialize_value(value: Any) -> Any:
    """Deserialize a single field value."""
    if isinstance(value, dict):
        type_name = value.get("_type")
        if type_name == "SourceLocation":
            return location_from_dict(value)
        enum_cls = _ENUM_TYPES.get(type_name) if type_name is not None else None
        if enum_cls is not None:
            return _deserialize_enum(enum_cls, value)
        if type_name is not None:
            return from_dict(value)
        return value
    if isinstance(value, list):
        return tuple(_deserialize_value(item) for item in value)
    return value


def _deserialize_enum(enum_cls: type[Enum], value: dict[str, Any]) -> Enum:
    try:
        if issubclass(enum_cls, Flag):
            return reduce(or_, (enum_cls[name] for name in value.get("names", ())), enum_cls(0))
        return enum_cls[value["name"]]
    except KeyError as e:
        msg = f"Unknown {enum_cls.__name__} member: {e.args[0]!r}"
        raise ValueError(msg) from e


def to_json(node: Node, *, indent: int | None = None) -> str:
    """Serialize an AST to a JSON string.

    Output is deterministic (sorted keys).

    Args:
        node: Root node to serialize.
        indent: JSON indentation level (None for compact).

    Returns:
        JSON string.

    """
    return json.dumps(to_dict(node), sort_keys=True, indent=indent)


def from_json(data: str) -> Node:
    """Deserialize an AST from a JSON string.

    Args:
        data: JSON string (as produced by to_json).

    Returns:
        AST node.

    Raises:
        ValueError: If the JSON doesn't represent a node.

    """
    raw = json.loads(data)
    if not isinstance(raw, dict):
        msg = f"Expected a serialized node, got {type(raw).__name__}"
        raise ValueError(msg)
    node = from_dict(raw)
    if not isinstance(node, Node):
        msg = f"Expected Node, got {type(node).__name__}"
        raise ValueError(msg)
    return node
