"""petor configuration.

Typed settings for a petor run.  Uses a Pydantic v2 model so values coming
from the environment or the CLI are validated at construction time.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "templates"


class PetorConfig(BaseModel):
    """Global petor configuration.

    Created once by the CLI entry point (or by tests) and handed to the
    ``Materializer``.
    """

    templates_dir: Path = Field(
        default=DEFAULT_TEMPLATES_DIR,
        description="Local catalog: one subdirectory per template",
    )
    scratch_dir: Path = Field(
        default_factory=lambda: Path(tempfile.gettempdir()) / ".petor",
        description="Where remote templates are cloned",
    )
    output_dir: Path = Field(default=Path("."), description="Parent of generated projects")
    schema_filename: str = Field(default="petor.toml")
    namespace: str = Field(default="petor", min_length=1)
    git_timeout: int = Field(default=300, ge=1, description="git clone timeout in seconds")

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def project_dir_name(self) -> str:
        """Name of the project subtree inside a template.

        The directory is literally called ``{{ petor.project.slug }}``.
        """
        return "{{ " + self.namespace + ".project.slug }}"

    @classmethod
    def from_env(cls) -> "PetorConfig":
        """Build a ``PetorConfig`` from environment variables.

        Recognised variables (all optional):
            PETOR_TEMPLATES_DIR, PETOR_SCRATCH_DIR, PETOR_OUTPUT_DIR,
            PETOR_GIT_TIMEOUT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("PETOR_TEMPLATES_DIR"):
            kwargs["templates_dir"] = Path(os.environ["PETOR_TEMPLATES_DIR"])
        if os.environ.get("PETOR_SCRATCH_DIR"):
            kwargs["scratch_dir"] = Path(os.environ["PETOR_SCRATCH_DIR"])
        if os.environ.get("PETOR_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["PETOR_OUTPUT_DIR"])
        if os.environ.get("PETOR_GIT_TIMEOUT"):
            kwargs["git_timeout"] = int(os.environ["PETOR_GIT_TIMEOUT"])
        return cls(**kwargs)
