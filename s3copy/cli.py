"""
cli.py — Command-line entrypoint: copy a file or directory tree.

Usage:
  s3copy SOURCE DESTINATION
  python -m s3copy SOURCE DESTINATION

SOURCE and DESTINATION are local paths or s3://bucket/key URIs, in any of the four
combinations:
  local  -> local  : file copy, or tree mirror when SOURCE is a directory
  local  -> s3     : upload, or tree upload under the destination key
  s3     -> local  : every object under the SOURCE prefix is downloaded
  s3     -> s3     : every object under the SOURCE prefix is copied server-side

Exit codes:
  0 : everything copied
  1 : a transfer failed (files copied before the failure are left in place)
  2 : bad usage; nothing was attempted
"""

# ── Stdlib imports ─────────────────────────────────────────────────────────────
import os
import sys
import stat
import logging
import argparse
from typing import List, Optional

from s3copy import __version__, config
from s3copy.errors import CopyError, UsageError
from s3copy.locations import RemoteRef, classify, describe
from s3copy.transfer import (
    copy_local_to_local,
    copy_local_to_remote,
    copy_remote_to_local,
    copy_remote_to_remote,
    make_s3_client,
    transfer_errors,
)
from s3copy.walker import (
    iter_local_files,
    iter_remote_objects,
    join_local,
    join_remote,
    mirror,
    skip_directory_markers,
)

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="s3copy",
        description="Copy a file or directory tree between local disk and S3.",
    )
    parser.add_argument("source", nargs="?", help="Local path or s3://bucket/key to copy from.")
    parser.add_argument("destination", nargs="?", help="Local path or s3://bucket/key to copy to.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse argv; raises UsageError unless both SOURCE and DESTINATION are given."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.source is None or args.destination is None:
        raise UsageError(parser.format_usage().strip(), {"argv": argv})
    return args


def _kind(ref) -> str:
    return "s3" if isinstance(ref, RemoteRef) else "local"


# ─────────────────────────────────────────────────────────────────────────────
# Dispatcher
# ─────────────────────────────────────────────────────────────────────────────
def copy(source: str, destination: str, client=None) -> int:
    """
    Copy SOURCE to DESTINATION and return the number of files transferred.

    A local SOURCE that is not a directory is copied to the literal DESTINATION;
    a local directory is always mirrored. An S3 SOURCE is always treated as a
    prefix: an object whose key equals the prefix goes to the literal DESTINATION,
    everything else lands beneath it.

    client: S3 client to use; created on demand when either side is on S3.
    Raises TransferError on the first failed operation.
    """
    src = classify(source)
    dst = classify(destination)

    log.info(f"From: {describe(src)}")
    log.info(f"To: {describe(dst)}")
    log.info(f"Source is {_kind(src)}, destination is {_kind(dst)}")

    if client is None and (isinstance(src, RemoteRef) or isinstance(dst, RemoteRef)):
        with transfer_errors(source, destination):
            client = make_s3_client()

    if isinstance(src, RemoteRef):
        entries = iter_remote_objects(client, src.bucket, src.key)
        if isinstance(dst, RemoteRef):
            def transfer(key, dst_key):
                copy_remote_to_remote(client, src.bucket, key, dst.bucket, dst_key)
            count = mirror(entries, join_remote, transfer, dst.key)
        else:
            def transfer(key, dst_path):
                copy_remote_to_local(client, src.bucket, key, dst_path)
            count = mirror(skip_directory_markers(entries), join_local, transfer, dst.path)
        if count == 0:
            log.warning(f"No objects found under {describe(src)}")
    else:
        with transfer_errors(src.path, describe(dst)):
            is_dir = stat.S_ISDIR(os.stat(src.path).st_mode)

        if isinstance(dst, RemoteRef):
            def transfer(path, dst_key):
                copy_local_to_remote(client, path, dst.bucket, dst_key)
            join, root = join_remote, dst.key
        else:
            transfer = copy_local_to_local
            join, root = join_local, dst.path

        if is_dir:
            count = mirror(iter_local_files(src.path), join, transfer, root)
        else:
            transfer(src.path, root)
            count = 1

    log.info(f"Finished copying {count} file(s)")
    return count


def resolve_log_level(name: str) -> Optional[int]:
    """Numeric level for a name like "debug"; None when logging does not know it."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else None


def main(argv: Optional[List[str]] = None) -> int:
    level = resolve_log_level(config.LOG_LEVEL)
    logging.basicConfig(level=level if level is not None else logging.INFO)
    if level is None:
        log.warning(f"Unknown LOG_LEVEL {config.LOG_LEVEL!r}, using INFO")

    try:
        args = parse_args(argv)
    except UsageError as e:
        print(e.message, file=sys.stderr)
        return 2

    try:
        copy(args.source, args.destination)
    except CopyError as e:
        log.error(e.message)
        return 1
    return 0


# ──────────────────────────────────────────────────────────────────────────────
# Standard Python entrypoint guard
# ──────────────────────────────────────────────────────────────────────────────
if __name__ == "__main__":
    sys.exit(main())
