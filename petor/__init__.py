"""petor -- interactive project scaffolding from TOML-driven templates.

A template is a directory holding a ``petor.toml`` schema and a project
subtree named ``{{ petor.project.slug }}``.  petor asks for every value in the
schema, copies the subtree and replaces ``{{ petor.<dotted.key> }}`` tokens
with the answers.

Quick usage::

    from petor.config import PetorConfig
    from petor.scaffolder import Materializer

    materializer = Materializer(PetorConfig())
    result = await materializer.materialize_local("backend")
"""

__version__ = "0.1.0"
