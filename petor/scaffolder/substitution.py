"""Placeholder-token substitution.

A token is ``{{`` optional whitespace, a dotted key, optional whitespace,
``}}``.  Dots in the key match literally.  Tokens whose key is not in the
replacement map are left untouched; there is no other template syntax.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from petor.scaffolder.replicator import list_files
from petor.utils import print_warning


def build_pattern(keys: list[str] | set[str] | dict[str, str]) -> re.Pattern[str] | None:
    """Compile a single regex matching a token for any of *keys*.

    Returns ``None`` when there are no keys.
    """
    if not keys:
        return None
    # Longest first so a key never shadows a longer one sharing its prefix
    alternatives = "|".join(re.escape(k) for k in sorted(keys, key=len, reverse=True))
    return re.compile(r"\{\{\s*(" + alternatives + r")\s*\}\}")


def substitute(content: str, replacements: dict[str, str]) -> str:
    """Replace every known token in *content* in a single pass.

    Replacement values are inserted literally and are not scanned again.
    """
    pattern = build_pattern(replacements)
    if pattern is None:
        return content
    return pattern.sub(lambda match: replacements[match.group(1)], content)


@dataclass
class SubstitutionReport:
    """Outcome of a substitution pass over a directory tree."""

    files_scanned: list[Path] = field(default_factory=list)
    files_changed: list[Path] = field(default_factory=list)
    files_skipped: list[Path] = field(default_factory=list)


def substitute_tree(root: str | Path, replacements: dict[str, str]) -> SubstitutionReport:
    """Rewrite every file under *root* with tokens replaced.

    Files that do not decode as UTF-8 are left as they are and reported in
    ``files_skipped``.  Files are only written back when their content
    changed.
    """
    report = SubstitutionReport()
    pattern = build_pattern(replacements)

    for path in list_files(root):
        report.files_scanned.append(path)
        try:
            content = path.read_bytes().decode("utf-8")
        except UnicodeDecodeError:
            print_warning(f"Skipping non-UTF-8 file: {path}")
            report.files_skipped.append(path)
            continue

        if pattern is None:
            continue
        updated = pattern.sub(lambda match: replacements[match.group(1)], content)
        if updated != content:
            path.write_bytes(updated.encode("utf-8"))
            report.files_changed.append(path)

    return report
