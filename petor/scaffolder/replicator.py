"""Recursive directory replication.

Content is copied byte-for-byte; placeholder substitution is a separate pass
over the destination.
"""

from __future__ import annotations

from pathlib import Path


def copy_tree(src: str | Path, dest: str | Path) -> list[Path]:
    """Copy every file and directory under *src* into *dest*.

    *dest* must already exist.  Subdirectories are created as they are
    reached.  Any ``OSError`` aborts the copy and leaves whatever was already
    written in place.

    Returns:
        Paths of the files written under *dest*.
    """
    src_dir = Path(src)
    dest_dir = Path(dest)
    written: list[Path] = []

    for entry in sorted(src_dir.iterdir()):
        target = dest_dir / entry.name
        if entry.is_dir():
            target.mkdir()
            written.extend(copy_tree(entry, target))
        elif entry.is_file():
            target.write_bytes(entry.read_bytes())
            written.append(target)

    return written


def list_files(root: str | Path) -> list[Path]:
    """Return every regular file under *root*, recursively, in sorted order."""
    return sorted(p for p in Path(root).rglob("*") if p.is_file())
