"""Shared pytest fixtures for the petor test suite.

Provides reusable fixtures for:
- A sample template tree inside a temporary catalog
- A ``PetorConfig`` pointing at temporary directories
- A scripted prompt that replaces terminal input
- Mock subprocess helpers
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from petor.config import PetorConfig

SLUG_DIR = "{{ petor.project.slug }}"

SAMPLE_SCHEMA = textwrap.dedent(
    """\
    [project]
    name = "My App"
    slug = "my_app"
    description = "A sample project"

    [server]
    host = "localhost"
    port = 8080
    """
)


# ---------------------------------------------------------------------------
# Scripted prompt
# ---------------------------------------------------------------------------


class ScriptedPrompt:
    """Async prompt returning pre-recorded answers in order.

    Every label asked is recorded in ``labels``.  Once the answers run out
    it answers ``""`` (keep the default).
    """

    def __init__(self, answers: list[str] | None = None) -> None:
        self.answers = list(answers or [])
        self.labels: list[str] = []

    async def __call__(self, label: str) -> str:
        self.labels.append(label)
        if self.answers:
            return self.answers.pop(0)
        return ""


@pytest.fixture
def scripted_prompt():
    """Factory for ``ScriptedPrompt`` instances.

    Usage:
        def test_collect(scripted_prompt):
            prompt = scripted_prompt(["Foo", ""])
    """
    return ScriptedPrompt


# ---------------------------------------------------------------------------
# Templates & configuration
# ---------------------------------------------------------------------------


def write_template(root: Path, schema: str = SAMPLE_SCHEMA) -> Path:
    """Create a template at *root* with a schema and a small project subtree."""
    project = root / SLUG_DIR
    (project / "src").mkdir(parents=True)
    (root / "petor.toml").write_text(schema, encoding="utf-8")
    (project / "README.md").write_text(
        "# {{ petor.project.name }}\n\n{{petor.project.description}}\n",
        encoding="utf-8",
    )
    (project / "src" / "server.conf").write_text(
        "listen {{ petor.server.host }}:{{ petor.server.port }}\n"
        "name {{ petor.project.slug }}\n"
        "keep {{ petor.unknown.key }}\n",
        encoding="utf-8",
    )
    return root


@pytest.fixture
def templates_dir(tmp_path: Path) -> Path:
    """Temporary catalog holding one template named ``sample``."""
    catalog = tmp_path / "templates"
    write_template(catalog / "sample")
    return catalog


@pytest.fixture
def petor_config(tmp_path: Path, templates_dir: Path) -> PetorConfig:
    """A ``PetorConfig`` whose directories all live under ``tmp_path``."""
    output = tmp_path / "out"
    output.mkdir()
    return PetorConfig(
        templates_dir=templates_dir,
        scratch_dir=tmp_path / "scratch",
        output_dir=output,
    )


# ---------------------------------------------------------------------------
# Mock subprocess
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory


@pytest.fixture
def make_template():
    """Factory writing a template tree; accepts a custom ``petor.toml`` body.

    Usage:
        def test_x(make_template, tmp_path):
            root = make_template(tmp_path / "tpl", schema="[project]\\n...")
    """
    return write_template
