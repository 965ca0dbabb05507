"""Storage key helpers for revisioned artifacts.

Keys are built as ``{prefix}/{file_pattern}`` for the index object and
``{prefix}/{file_pattern}:{revision}`` for a revision object. Segments are
joined with a single ``/``; slashes at the join points are collapsed so that
``"app/"`` and ``"app"`` produce the same key.
"""

REVISION_SEPARATOR = ":"


def join_uri_segments(*segments):
    """Join key segments with exactly one ``/`` between them.

    Empty segments are skipped. Leading and trailing slashes of every segment
    are dropped, so the result never starts or ends with ``/`` and never
    contains ``//`` at a join point.
    """
    parts = []
    for segment in segments:
        if not segment:
            continue
        stripped = segment.strip("/")
        if stripped:
            parts.append(stripped)
    return "/".join(parts)


def build_index_key(prefix, file_pattern):
    return join_uri_segments(prefix, file_pattern)


def build_revision_key(prefix, file_pattern, revision):
    # The revision is appended verbatim, slashes included.
    return build_index_key(prefix, file_pattern) + REVISION_SEPARATOR + revision


def build_revision_prefix(prefix, file_pattern):
    """Listing prefix shared by all revisions of ``file_pattern``."""
    return build_index_key(prefix, file_pattern) + REVISION_SEPARATOR


def revision_from_key(key, revision_prefix):
    if not key.startswith(revision_prefix):
        raise ValueError(f"Key {key!r} is not a revision of {revision_prefix!r}")
    return key[len(revision_prefix) :]
