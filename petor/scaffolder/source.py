"""Template sources: the local catalog and remote git clones.

The catalog is a directory with one subdirectory per template.  A remote
template is cloned into a scratch directory keyed by the repository basename;
any earlier clone at that location is removed first so stale content is
never reused.
"""

from __future__ import annotations

import asyncio
import re
import shutil
from pathlib import Path

from petor.errors import SourceResolutionError
from petor.utils import print_warning, run_command


class TemplateCatalog:
    """Named templates bundled in a local directory."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def list_templates(self) -> list[str]:
        """Return the sorted names of every template in the catalog."""
        if not self.root.is_dir():
            return []
        return sorted(
            p.name for p in self.root.iterdir()
            if p.is_dir() and not p.name.startswith((".", "_"))
        )

    def resolve(self, name: str) -> Path:
        """Return the directory of template *name*.

        Raises:
            SourceResolutionError: If no such template exists.
        """
        path = self.root / name
        if not name or not path.is_dir() or path.resolve().parent != self.root.resolve():
            raise SourceResolutionError(
                f"No such template: '{name}'. Use the `--list` option to see the list of templates."
            )
        return path


def repository_basename(url: str) -> str:
    """Return the repository name of a clone URL, without ``.git``.

    Examples::

        repository_basename("https://github.com/acme/starter.git") -> "starter"
        repository_basename("git@github.com:acme/starter") -> "starter"
    """
    name = re.split(r"[/:\\]", url.rstrip("/\\"))[-1]
    if name.endswith(".git"):
        name = name[: -len(".git")]
    if name in ("", ".", ".."):
        raise SourceResolutionError(f"Cannot derive a repository name from '{url}'")
    return name


async def clone_template(url: str, scratch_dir: str | Path, timeout: int = 300) -> Path:
    """Clone *url* into ``<scratch_dir>/<basename>`` and strip its ``.git``.

    Returns:
        Path to the fresh clone.

    Raises:
        SourceResolutionError: If git fails or the clone is missing afterwards.
            Also raised when the target would fall outside *scratch_dir*.
    """
    scratch = Path(scratch_dir)
    target = scratch / repository_basename(url)
    if target.resolve().parent != scratch.resolve():
        raise SourceResolutionError(f"Refusing to clone '{url}' outside {scratch}")

    if target.exists():
        print_warning(
            "Template already exists in the temporary directory. "
            "Removing it before cloning again."
        )
        await asyncio.to_thread(shutil.rmtree, target)

    await asyncio.to_thread(target.parent.mkdir, parents=True, exist_ok=True)

    cmd = ["git", "clone", "--", url, str(target)]
    returncode, _, stderr = await run_command(cmd, timeout=timeout)
    if returncode != 0 or not target.is_dir():
        raise SourceResolutionError(
            "Failed to clone the template. Please check the URL and try again.",
            command=" ".join(cmd),
            stderr=stderr,
        )

    git_dir = target / ".git"
    if git_dir.exists():
        await asyncio.to_thread(shutil.rmtree, git_dir)
    return target
