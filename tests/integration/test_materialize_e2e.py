"""Integration tests for the bundled template catalog.

These tests run the real materializer against the ``backend`` template that
ships with petor and check that the generated project is well formed.  No
git or network access is needed.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from petor.config import PetorConfig
from petor.scaffolder import Materializer, list_files


@pytest.fixture
def bundled_config(tmp_path: Path) -> PetorConfig:
    return PetorConfig(output_dir=tmp_path, scratch_dir=tmp_path / "scratch")


@pytest.mark.integration
class TestBundledBackendTemplate:
    """Materialize the bundled ``backend`` template end to end."""

    async def test_catalog_lists_backend(self, bundled_config: PetorConfig):
        assert "backend" in Materializer(bundled_config).list_templates()

    async def test_materialize_with_answers(self, bundled_config: PetorConfig, scripted_prompt):
        prompt = scripted_prompt([
            "Order Service",      # project.name
            "Tracks orders",      # project.description
            "1.2.3",              # project.version
            "Ada Lovelace",       # author.name
            "ada@example.com",    # author.email
            "127.0.0.1",          # server.host
            "9000",               # server.port
        ])
        result = await Materializer(bundled_config, prompt=prompt).materialize_local("backend")

        root = result.destination
        assert root == bundled_config.output_dir / "order_service"

        package = json.loads((root / "package.json").read_text(encoding="utf-8"))
        assert package["name"] == "order_service"
        assert package["version"] == "1.2.3"
        assert package["author"] == "Ada Lovelace <ada@example.com>"

        main_ts = (root / "src" / "main.ts").read_text(encoding="utf-8")
        assert 'const HOST = "127.0.0.1";' in main_ts
        assert "const PORT = 9000;" in main_ts

        for path in list_files(root):
            assert "{{" not in path.read_text(encoding="utf-8"), path

    async def test_generate_keeps_placeholders(self, bundled_config: PetorConfig):
        root = await Materializer(bundled_config).generate("backend", "raw")
        package_json = (root / "package.json").read_text(encoding="utf-8")
        assert '"name": "{{ petor.project.slug }}"' in package_json
        assert not (root / "petor.toml").exists()
