"""Human readable views of raw bytes and decoded fields."""
from __future__ import annotations

from typing import Iterator, List, Optional

from rich.markup import escape
from rich.tree import Tree

from ._types import Buffer
from .const import DEFAULT_RECURSION_LIMIT, WireType
from .errors import DecodeError
from .fields import Field


def dump_bytes(data: Buffer) -> Iterator[str]:
    """Yield one line per byte: binary, decimal and hex."""
    for b in bytes(data):
        yield f"0b{b:08b} {b:3d} 0x{b:02X}"


def _embedded_or_none(field: Field, max_depth: int) -> Optional[List[Field]]:
    try:
        fields = field.as_embedded(max_depth=max_depth)
    except DecodeError:
        return None
    return fields or None


def _printable_string(field: Field) -> Optional[str]:
    value = field.as_string(errors="replace")
    if "\ufffd" in value or not value.isprintable():
        return None
    return value


def describe_field(field: Field, max_depth: int = DEFAULT_RECURSION_LIMIT) -> str:
    """One-line summary showing every reasonable reading of the payload."""
    if field.wire_type == WireType.VARINT:
        return f"AsInt64:{field.as_int64()} AsSint64:{field.as_sint64()}"
    if field.wire_type == WireType.FIXED_64:
        return f"AsDouble:{field.as_double()!r}"
    if field.wire_type == WireType.FIXED_32:
        return f"AsFloat:{field.as_float()!r}"

    try:
        embedded_len = len(field.as_embedded(max_depth=max_depth))
    except DecodeError:
        embedded_len = "-"
    return f"AsString:{field.as_string(errors='replace')!r} EmbeddedLen:{embedded_len}"


def _label(field: Field, summary: str) -> str:
    return f"[bold]{field.number}[/] [cyan]{field.wire_type.name}[/] {escape(summary)}"


def build_tree(
    fields: List[Field],
    label: str = "message",
    max_depth: int = DEFAULT_RECURSION_LIMIT,
    tree: Optional[Tree] = None,
) -> Tree:
    """
    Render decoded fields as a :class:`rich.tree.Tree`.

    Length-delimited payloads are shown as text when they are printable UTF-8,
    as a nested message when they parse as a non-empty one, and as hex
    otherwise. A payload is only one of these things when read with a schema;
    this is a best guess.
    """
    if tree is None:
        tree = Tree(escape(label))

    for field in fields:
        if field.wire_type != WireType.LEN_DELIM:
            tree.add(_label(field, describe_field(field, max_depth)))
            continue

        text = _printable_string(field)
        if text is not None:
            tree.add(_label(field, repr(text)))
            continue

        embedded = _embedded_or_none(field, max_depth)
        if embedded is not None:
            branch = tree.add(_label(field, f"message ({len(embedded)} fields)"))
            build_tree(embedded, max_depth=max_depth, tree=branch)
        else:
            tree.add(_label(field, f"bytes {field.payload.hex(' ') or '(empty)'}"))

    return tree
