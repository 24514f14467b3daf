"""
Folder-aware listings over the flat BOS key space.

BOS has no directories, while repository clients expect a listing that shows
sub-folders. Folder entries are synthesized from the ancestors of every key.
"""

from __future__ import annotations

from typing import Iterable, List, Set

SEPARATOR = "/"


def extract_folders(path: str) -> List[str]:
    """
    Return every ancestor folder of ``path``, deepest first, each with one trailing ``/``.

    ``a/b/y.jar`` -> ``["a/b/", "a/"]``; a path without ``/`` has no ancestors.
    """
    folders = []
    end = path.rfind(SEPARATOR)
    while end > 0:
        folders.append(path[:end] + SEPARATOR)
        end = path.rfind(SEPARATOR, 0, end)
    return folders


def to_maven_file_list(keys: Iterable[str], prefix: str) -> List[str]:
    """
    Project ``keys`` listed under ``prefix`` onto a listing relative to ``prefix``.

    Relative entries keep the backend order and are followed by the
    synthesized folders in sorted order. Keys that share the textual prefix
    without being below it (``prefix`` itself, or ``prefix`` + ``x...``) are
    skipped.

    Raises:
        ValueError: a key does not start with ``prefix``
    """
    entries: List[str] = []
    folders: Set[str] = set()

    for key in keys:
        relative = key
        if prefix:
            if not key.startswith(prefix):
                raise ValueError(f"Key '{key}' is not under listing prefix '{prefix}'")
            remainder = key[len(prefix):]
            if not remainder.startswith(SEPARATOR):
                continue
            relative = remainder[len(SEPARATOR):]
        if not relative:
            continue

        entries.append(relative)
        folders.update(extract_folders(relative))

    return list(dict.fromkeys(entries + sorted(folders)))
