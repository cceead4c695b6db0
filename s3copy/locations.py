"""
locations.py — Classify command-line locations as S3 objects or local paths.

A location is remote when it has the shape s3://<bucket>/<key>:
  - bucket: one or more characters, no slash
  - key   : the remainder, possibly empty (bucket root)

Anything else is a local filesystem path. Classification is purely syntactic;
nothing is checked against the filesystem or the bucket.
"""

# ── Stdlib imports ─────────────────────────────────────────────────────────────
import re
from typing import NamedTuple, Tuple, Union

S3_SCHEME = "s3"
# Matched with fullmatch: "." stops at newlines, so a key containing one is local.
S3_URI_RE = re.compile(r"s3://([^/]+)/(.*)")


class RemoteRef(NamedTuple):
    bucket: str
    key: str


class LocalRef(NamedTuple):
    path: str


Location = Union[RemoteRef, LocalRef]


# ──────────────────────────────────────────────────────────────────────────────
# split_s3_uri(value: str) -> (bucket, key, is_remote)
# A non-match is not an error: it means "treat as a local path".
# ──────────────────────────────────────────────────────────────────────────────
def split_s3_uri(value: str) -> Tuple[str, str, bool]:
    m = S3_URI_RE.fullmatch(value)
    if not m:
        return "", "", False
    return m.group(1), m.group(2), True


def classify(value: str) -> Location:
    """Return a RemoteRef for s3://bucket/key strings, a LocalRef otherwise."""
    bucket, key, is_remote = split_s3_uri(value)
    if is_remote:
        return RemoteRef(bucket, key)
    return LocalRef(value)


def s3_uri(bucket: str, key: str) -> str:
    """Join bucket + key into an s3:// URI string."""
    return f"{S3_SCHEME}://{bucket}/{key}"


def describe(ref: Location) -> str:
    if isinstance(ref, RemoteRef):
        return s3_uri(ref.bucket, ref.key)
    return ref.path
