"""Template materialization orchestrator.

Drives a run from template source to finished project:

1. Resolve the template (catalog entry or fresh git clone).
2. Load and validate ``petor.toml``.
3. Collect values interactively.
4. Refuse an existing destination, then create it.
5. Copy the template's ``{{ petor.project.slug }}`` subtree.
6. Flatten the resolved configuration.
7. Replace every ``{{ petor.* }}`` token in the copied files.

``generate`` is the non-interactive variant: it copies a catalog template
verbatim and skips steps 2, 3, 6 and 7.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path

from petor.config import PetorConfig
from petor.errors import DestinationConflictError, SchemaError, SourceResolutionError
from petor.scaffolder.collector import NAME_KEY, SLUG_KEY, Prompt, SchemaCollector
from petor.scaffolder.flattener import flatten
from petor.scaffolder.replicator import copy_tree
from petor.scaffolder.schema import ScalarNode, TableNode, load_schema, validate_schema
from petor.scaffolder.source import TemplateCatalog, clone_template
from petor.scaffolder.substitution import substitute_tree
from petor.utils import ask, print_info


@dataclass
class MaterializeResult:
    """Structured result of an interactive materialization."""

    template_dir: Path
    destination: Path
    config: TableNode
    replacements: dict[str, str] = field(default_factory=dict)
    files_written: list[Path] = field(default_factory=list)
    files_changed: list[Path] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def summary(self) -> dict[str, str]:
        """Return label/value pairs for the console summary table."""
        project = self.config.get("project")
        name = ""
        if isinstance(project, TableNode):
            node = project.get(NAME_KEY)
            if isinstance(node, ScalarNode):
                name = str(node.value)
        return {
            "Project": name,
            "Destination": str(self.destination),
            "Files copied": str(len(self.files_written)),
            "Files updated": str(len(self.files_changed)),
            "Placeholders": str(len(self.replacements)),
            "Warnings": str(len(self.warnings)),
        }


class Materializer:
    """Creates projects from templates.

    Attributes:
        config: Run configuration (catalog, scratch and output locations).
        prompt: Async prompt handed to the ``SchemaCollector``.
        catalog: The local template catalog.
    """

    def __init__(self, config: PetorConfig, prompt: Prompt = ask) -> None:
        self.config = config
        self.prompt = prompt
        self.catalog = TemplateCatalog(config.templates_dir)

    # -- Alternate modes ---------------------------------------------------

    def list_templates(self) -> list[str]:
        """Names of every template in the local catalog."""
        return self.catalog.list_templates()

    async def generate(self, template: str, project_name: str | None = None) -> Path:
        """Copy catalog template *template* verbatim to ``<output_dir>/<project_name>``.

        *project_name* defaults to the template name.  Only the project
        subtree is copied when the template has one.  No values are collected
        and no tokens are replaced.

        Raises:
            SourceResolutionError: If the template does not exist.
            DestinationConflictError: If the destination already exists.
        """
        template_dir = self.catalog.resolve(template)
        destination = self.config.output_dir / (project_name or template)
        if destination.exists():
            raise DestinationConflictError(destination)

        project_src = template_dir / self.config.project_dir_name
        source = project_src if project_src.is_dir() else template_dir

        await asyncio.to_thread(destination.mkdir, parents=True)
        await asyncio.to_thread(copy_tree, source, destination)
        return destination

    # -- Interactive materialization ----------------------------------------

    async def materialize_local(self, name: str) -> MaterializeResult:
        """Materialize catalog template *name*."""
        return await self.materialize(self.catalog.resolve(name))

    async def materialize_remote(self, url: str) -> MaterializeResult:
        """Clone *url* into the scratch directory and materialize it."""
        template_dir = await clone_template(
            url, self.config.scratch_dir, timeout=self.config.git_timeout
        )
        print_info(f"Cloned template into {template_dir}")
        return await self.materialize(template_dir)

    async def materialize(self, template_dir: str | Path) -> MaterializeResult:
        """Run the full pipeline against the template at *template_dir*.

        Raises:
            SourceResolutionError: Missing ``petor.toml`` or project subtree.
            SchemaError: Invalid schema or unsupported field.
            DestinationConflictError: The destination already exists.
        """
        template_dir = Path(template_dir)
        schema = load_schema(template_dir / self.config.schema_filename)
        validate_schema(schema)

        project_src = template_dir / self.config.project_dir_name
        if not project_src.is_dir():
            raise SourceResolutionError(
                f"Template has no '{self.config.project_dir_name}' directory: {template_dir}"
            )

        collector = SchemaCollector(self.prompt)
        resolved = await collector.collect(schema)
        replacements = flatten(resolved, self.config.namespace)

        destination = self.config.output_dir / _project_slug(resolved)
        if destination.exists():
            raise DestinationConflictError(destination)
        await asyncio.to_thread(destination.mkdir, parents=True)

        written = await asyncio.to_thread(copy_tree, project_src, destination)
        report = await asyncio.to_thread(substitute_tree, destination, replacements)

        return MaterializeResult(
            template_dir=template_dir,
            destination=destination,
            config=resolved,
            replacements=replacements,
            files_written=written,
            files_changed=report.files_changed,
            warnings=collector.warnings,
        )


def _project_slug(resolved: TableNode) -> str:
    """Return the collected ``project.slug``; it must be non-empty."""
    project = resolved.get("project")
    slug = project.get(SLUG_KEY) if isinstance(project, TableNode) else None
    if not isinstance(slug, ScalarNode) or not str(slug.value):
        raise SchemaError(
            "project.slug resolved to an empty value; enter a different project name",
            key="project.slug",
        )
    return str(slug.value)
