"""Maps repository paths onto flat BOS object keys."""

SEPARATOR = "/"


def resolve(*paths: str) -> str:
    """Join path fragments into a BOS key.

    Empty and ``.`` segments are dropped, so the key never starts or ends
    with ``/`` and never contains ``//``::

        resolve("/repo/base", "a/b.jar")   -> "repo/base/a/b.jar"
        resolve("/repo/base/", "/./a.jar") -> "repo/base/a.jar"
        resolve("", "")                    -> ""
    """
    segments = []
    for path in paths:
        if not path:
            continue
        segments.extend(s for s in path.split(SEPARATOR) if s and s != ".")
    return SEPARATOR.join(segments)
