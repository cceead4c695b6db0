"""
walker.py — Mirror every file under a source root beneath a destination root.

Sources are generators of (source_id, relative_path) pairs:
  - iter_local_files   : depth-first scandir, name order, files only
  - iter_remote_objects: ListObjectsV2 by prefix, service (lexicographic) order

mirror() is the same loop for both: recompute the destination for each entry and
hand it to a single-file transfer. Empty directories are never recreated.
"""

# ── Stdlib imports ─────────────────────────────────────────────────────────────
import os
import logging
from typing import Callable, Iterable, Iterator, Tuple

from s3copy.errors import TransferError
from s3copy.locations import s3_uri
from s3copy.transfer import IO_ERRORS

log = logging.getLogger(__name__)

Entry = Tuple[str, str]


# ─────────────────────────────────────────────────────────────────────────────
# Enumeration
# ─────────────────────────────────────────────────────────────────────────────
def _log_walk_error(err: OSError) -> None:
    # Unreadable subtrees are reported and skipped; the walk carries on.
    log.warning(f"Skipping unreadable path during walk: {err}")


def _scan_sorted(path: str) -> Iterator[str]:
    # Files and subdirectories merged in one name-sorted pass, depth-first.
    try:
        with os.scandir(path) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as err:
        _log_walk_error(err)
        return
    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            yield from _scan_sorted(entry.path)
        elif entry.is_file():
            yield entry.path


def iter_local_files(root: str) -> Iterator[Entry]:
    """
    Yield (file_path, path relative to root) for every file below root.

    Entries of each directory are visited in name order, descending into a
    subdirectory where its name sorts: a/1.txt, a/2.txt, b.txt, c/d/e.txt.
    Symlinked directories are not followed.
    """
    for path in _scan_sorted(root):
        yield path, os.path.relpath(path, root)


def iter_remote_objects(client, bucket: str, prefix: str) -> Iterator[Entry]:
    """
    Yield (key, key minus prefix) for every object whose key starts with prefix.

    The match is textual: prefix "foo" also yields "foobar". Known latent bug, kept
    so that a prefix naming a single object still works.
    """
    paginator = client.get_paginator("list_objects_v2")
    pages = iter(paginator.paginate(Bucket=bucket, Prefix=prefix))
    while True:
        try:
            page = next(pages)
        except StopIteration:
            return
        except IO_ERRORS as e:
            uri = s3_uri(bucket, prefix)
            raise TransferError(f'Listing "{uri}" failed: {e}', {"source": uri}) from e
        for obj in page.get("Contents", []):
            key = obj["Key"]
            yield key, key[len(prefix):]


def skip_directory_markers(entries: Iterable[Entry]) -> Iterator[Entry]:
    """Drop zero-byte "folder/" placeholder keys, which cannot become local files."""
    for source_id, rel in entries:
        if source_id.endswith("/"):
            log.debug(f"Skipping directory marker {source_id}")
            continue
        yield source_id, rel


# ─────────────────────────────────────────────────────────────────────────────
# Destination paths
# An empty relative path means the entry IS the root: use the literal destination.
# ─────────────────────────────────────────────────────────────────────────────
def join_local(root: str, rel: str) -> str:
    """
    Place rel beneath root. Raises TransferError when rel climbs out of root
    (an S3 key such as "data/../../x").
    """
    if not rel:
        return root
    joined = os.path.normpath(os.path.join(root, rel.lstrip("/")))
    base = os.path.abspath(root)
    if os.path.commonpath([base, os.path.abspath(joined)]) != base:
        raise TransferError(
            f'Refusing to write "{rel}" outside of "{root}"',
            {"source": rel, "destination": root},
        )
    return joined


def join_remote(root: str, rel: str) -> str:
    if not rel:
        return root
    rel = rel.replace(os.sep, "/").lstrip("/")
    if not root or root.endswith("/"):
        return root + rel
    return f"{root}/{rel}"


# ─────────────────────────────────────────────────────────────────────────────
# Mirror loop
# ─────────────────────────────────────────────────────────────────────────────
def mirror(
    entries: Iterable[Entry],
    join: Callable[[str, str], str],
    transfer: Callable[[str, str], None],
    destination: str,
) -> int:
    """Transfer each entry to join(destination, rel), one at a time. Returns the count."""
    count = 0
    for source_id, rel in entries:
        transfer(source_id, join(destination, rel))
        count += 1
    return count
