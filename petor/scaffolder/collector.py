"""Interactive collection of template values.

``SchemaCollector`` walks a template schema depth-first and asks for every
scalar leaf, showing the schema value as the default.  Prompts are strictly
sequential: each one is awaited before the next is issued.

The prompt is an injected ``async (label) -> str`` callable so tests can
script the answers instead of reading from a terminal.
"""

from __future__ import annotations

import math
import re
from collections.abc import Awaitable, Callable

from petor.errors import SchemaError
from petor.scaffolder.schema import (
    ConfigNode,
    InvalidNode,
    ScalarNode,
    TableNode,
    join_path,
)
from petor.utils import ask, print_warning

Prompt = Callable[[str], Awaitable[str]]

SLUG_KEY = "slug"
NAME_KEY = "name"


# ---------------------------------------------------------------------------
# Value helpers
# ---------------------------------------------------------------------------


def derive_slug(name: str) -> str:
    """Derive a filesystem-safe slug from a display name.

    Lower-cases *name*, replaces every character outside ``[a-z0-9-]`` with
    ``_``, collapses runs of ``_`` and then strips one leading and one
    trailing hyphen.  Underscores are not trimmed, so a trailing symbol
    leaves a trailing ``_``.

    Examples::

        derive_slug("My Cool App!") -> "my_cool_app_"
        derive_slug("-Edge-Case-") -> "edge-case"
    """
    slug = re.sub(r"[^a-z0-9-]", "_", name.lower())
    slug = re.sub(r"_{2,}", "_", slug)
    return re.sub(r"^-|-$", "", slug)


NUMBER_RE = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")


def parse_number(raw: str) -> int | float | None:
    """Parse *raw* as an int, then as a finite float.  ``None`` on failure.

    Only plain ASCII decimal notation is accepted; ``1_000`` and non-ASCII
    digits are rejected even though ``int()`` would take them.
    """
    if not NUMBER_RE.fullmatch(raw):
        return None
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


# ---------------------------------------------------------------------------
# Collector
# ---------------------------------------------------------------------------


class SchemaCollector:
    """Resolve a template schema by prompting for each leaf.

    Attributes:
        prompt: Async callable returning the user's raw answer for a label.
        warnings: Messages for answers that were rejected and replaced by
            their defaults.
    """

    def __init__(self, prompt: Prompt = ask) -> None:
        self.prompt = prompt
        self.warnings: list[str] = []

    async def collect(self, node: TableNode, path: str = "") -> TableNode:
        """Return a resolved copy of *node*; *node* itself is not modified.

        A ``slug`` leaf is never prompted.  It is derived from the sibling
        ``name`` once every other leaf of the same table is answered.

        Raises:
            SchemaError: On an unsupported value, or a ``slug`` without a
                sibling ``name``.
        """
        resolved: dict[str, ConfigNode] = {}
        has_slug = False

        for key, child in node.children.items():
            child_path = join_path(path, key)
            if isinstance(child, InvalidNode):
                raise SchemaError(
                    f"Unsupported type '{child.type_name}' for {child_path}. "
                    "Please check the petor.toml file.",
                    key=child_path,
                )
            elif isinstance(child, TableNode):
                resolved[key] = await self.collect(child, child_path)
            elif key == SLUG_KEY and isinstance(child, ScalarNode):
                resolved[key] = child
                has_slug = True
            elif isinstance(child, ScalarNode):
                resolved[key] = await self._collect_scalar(child, child_path)
            else:
                raise TypeError(f"Not a ConfigNode: {child!r}")

        if has_slug:
            name = resolved.get(NAME_KEY)
            if not isinstance(name, ScalarNode):
                slug_path = join_path(path, SLUG_KEY)
                raise SchemaError(
                    f"Cannot derive {slug_path}: no sibling '{NAME_KEY}' field",
                    key=slug_path,
                )
            resolved[SLUG_KEY] = ScalarNode(derive_slug(str(name.value)))

        return TableNode(resolved)

    async def _collect_scalar(self, node: ScalarNode, path: str) -> ScalarNode:
        answer = (await self.prompt(f"{path} ({node.value}): ")).strip()
        if not answer:
            return node
        if not node.is_numeric:
            return ScalarNode(answer)

        number = parse_number(answer)
        if number is None:
            message = f"Invalid number for {path}. Using default value: {node.value}"
            self.warnings.append(message)
            print_warning(message)
            return node
        return ScalarNode(number)
