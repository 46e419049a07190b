"""Flatten a resolved configuration into dotted-key replacements."""

from __future__ import annotations

from decimal import Decimal

from petor.errors import SchemaError
from petor.scaffolder.schema import ConfigNode, InvalidNode, ScalarNode, TableNode


def render_scalar(node: ScalarNode) -> str:
    """Render a scalar leaf the way it appears in generated files.

    Numbers are written in plain decimal notation: integral floats lose
    their fractional part (``1000.0`` -> ``"1000"``) and exponents are
    expanded (``1e16`` -> ``"10000000000000000"``).
    """
    value = node.value
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return format(Decimal(repr(value)), "f")
    return str(value)


def flatten(node: TableNode, prefix: str = "petor") -> dict[str, str]:
    """Turn a nested ``TableNode`` into ``{"prefix.a.b": "value"}`` pairs.

    Every scalar leaf yields exactly one entry keyed by its full dotted path.

    Raises:
        SchemaError: If the tree still holds an unsupported value, or two
            leaves share a dotted path (a quoted ``"a.b"`` key next to a
            ``[a]`` table with ``b``).
    """
    result: dict[str, str] = {}
    for key, child in node.children.items():
        for path, value in _flatten_child(child, f"{prefix}.{key}").items():
            if path in result:
                raise SchemaError(
                    f"Duplicate key {path}. Please check the petor.toml file.",
                    key=path,
                )
            result[path] = value
    return result


def _flatten_child(child: ConfigNode, path: str) -> dict[str, str]:
    if isinstance(child, TableNode):
        return flatten(child, path)
    if isinstance(child, ScalarNode):
        return {path: render_scalar(child)}
    if isinstance(child, InvalidNode):
        raise SchemaError(
            f"Unsupported type '{child.type_name}' for {path}. Please check the petor.toml file.",
            key=path,
        )
    raise TypeError(f"Not a ConfigNode: {child!r}")
