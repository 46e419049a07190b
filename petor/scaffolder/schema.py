"""Template schema model and ``petor.toml`` loading.

A schema is a tree of ``ConfigNode`` values:

* ``ScalarNode``  -- a string or number leaf the user is asked about.
* ``TableNode``   -- an ordered mapping of keys to child nodes.
* ``InvalidNode`` -- anything else TOML can express (booleans, arrays,
  dates).  Parsing keeps it so the error can name the exact key once the
  collector or flattener reaches it.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

from petor.errors import SchemaError, SourceResolutionError


@dataclass(frozen=True)
class ScalarNode:
    """A string or numeric leaf."""

    value: str | int | float

    @property
    def is_numeric(self) -> bool:
        return not isinstance(self.value, str)


@dataclass
class TableNode:
    """A nested table; key order follows the source document."""

    children: dict[str, "ConfigNode"] = field(default_factory=dict)

    def get(self, key: str) -> "ConfigNode | None":
        return self.children.get(key)


@dataclass(frozen=True)
class InvalidNode:
    """A value of an unsupported type."""

    value: Any

    @property
    def type_name(self) -> str:
        return type(self.value).__name__


ConfigNode = Union[ScalarNode, TableNode, InvalidNode]


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------


def parse_node(raw: Any) -> ConfigNode:
    """Convert parsed TOML data into a ``ConfigNode`` tree."""
    if isinstance(raw, dict):
        return TableNode({str(key): parse_node(value) for key, value in raw.items()})
    # bool is a subclass of int but is not a supported leaf
    if isinstance(raw, bool):
        return InvalidNode(raw)
    if isinstance(raw, (str, int, float)):
        return ScalarNode(raw)
    return InvalidNode(raw)


def to_data(node: ConfigNode) -> Any:
    """Convert a ``ConfigNode`` tree back into plain Python data."""
    if isinstance(node, TableNode):
        return {key: to_data(child) for key, child in node.children.items()}
    return node.value


def join_path(path: str, key: str) -> str:
    """Append *key* to a dotted *path*."""
    return f"{path}.{key}" if path else key


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_schema(path: str | Path) -> TableNode:
    """Load and parse a template's ``petor.toml``.

    Raises:
        SourceResolutionError: If the file is missing or is not valid TOML.
    """
    schema_path = Path(path)
    if not schema_path.is_file():
        raise SourceResolutionError(
            f"No {schema_path.name} file found in the template directory: {schema_path.parent}"
        )
    try:
        data = tomllib.loads(schema_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise SourceResolutionError(f"Invalid TOML in {schema_path}: {exc}") from exc
    node = parse_node(data)
    assert isinstance(node, TableNode)  # tomllib always returns a dict
    return node


def validate_schema(schema: TableNode) -> None:
    """Check that *schema* declares a ``project`` table with ``name`` and ``slug``.

    Raises:
        SchemaError: If the table or one of its fields is missing.
    """
    project = schema.get("project")
    if not isinstance(project, TableNode):
        raise SchemaError("petor.toml must declare a [project] table", key="project")
    for key in ("name", "slug"):
        child = project.get(key)
        if not isinstance(child, ScalarNode) or child.is_numeric:
            raise SchemaError(
                f"petor.toml [project] table must declare a string '{key}'",
                key=f"project.{key}",
            )
