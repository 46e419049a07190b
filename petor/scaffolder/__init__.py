"""petor scaffolder -- turns a template into a new project.

Quick usage::

    from petor.config import PetorConfig
    from petor.scaffolder import Materializer

    materializer = Materializer(PetorConfig(output_dir=Path("/tmp/out")))
    result = await materializer.materialize_remote("https://github.com/acme/starter.git")
"""

from petor.scaffolder.collector import SchemaCollector, derive_slug
from petor.scaffolder.flattener import flatten
from petor.scaffolder.materializer import MaterializeResult, Materializer
from petor.scaffolder.replicator import copy_tree, list_files
from petor.scaffolder.schema import (
    ConfigNode,
    InvalidNode,
    ScalarNode,
    TableNode,
    load_schema,
    parse_node,
)
from petor.scaffolder.source import TemplateCatalog, clone_template
from petor.scaffolder.substitution import substitute, substitute_tree

__all__ = [
    # Schema model
    "ConfigNode",
    "ScalarNode",
    "TableNode",
    "InvalidNode",
    "parse_node",
    "load_schema",
    # Pipeline stages
    "SchemaCollector",
    "derive_slug",
    "flatten",
    "copy_tree",
    "list_files",
    "substitute",
    "substitute_tree",
    # Sources
    "TemplateCatalog",
    "clone_template",
    # Orchestration
    "Materializer",
    "MaterializeResult",
]
