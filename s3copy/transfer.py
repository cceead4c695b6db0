"""
transfer.py — Move exactly one byte stream from a source to a destination.

Four directions:
  - local  -> local  : stream copy, destination parents created
  - local  -> remote : managed upload on the calling thread
  - remote -> local  : GetObject body streamed to disk, fsync'd before returning
  - remote -> remote : server-side CopyObject (no bytes pass through this process)

Every routine logs a progress line before it starts and raises TransferError on
any local or S3 failure. The S3 client is passed in by the caller.
"""

# ── Stdlib imports ─────────────────────────────────────────────────────────────
import os
import shutil
import logging
import contextlib

# ── External deps ─────────────────────────────────────────────────────────────
import boto3
from boto3.exceptions import Boto3Error
from boto3.s3.transfer import TransferConfig
from botocore.exceptions import BotoCoreError, ClientError

from s3copy import config
from s3copy.errors import TransferError
from s3copy.locations import s3_uri

log = logging.getLogger(__name__)

# Keep boto3's managed upload single-threaded: one transfer at a time, start to finish.
TRANSFER_CONFIG = TransferConfig(use_threads=False)

IO_ERRORS = (OSError, ClientError, BotoCoreError, Boto3Error)


def make_s3_client():
    """Build the one S3 client used for a whole run."""
    return boto3.client(
        "s3",
        endpoint_url=config.S3_ENDPOINT_URL,
        region_name=config.S3_REGION,
    )


@contextlib.contextmanager
def transfer_errors(source: str, destination: str):
    """Re-raise local/S3 failures as TransferError naming both ends."""
    try:
        yield
    except IO_ERRORS as e:
        raise TransferError(
            f'Copying from "{source}" to "{destination}" failed: {e}',
            {"source": source, "destination": destination},
        ) from e


def make_parent_dirs(path: str) -> None:
    # Ensure parent directory exists before writing
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)


# ─────────────────────────────────────────────────────────────────────────────
# Single-file copies
# ─────────────────────────────────────────────────────────────────────────────
def copy_local_to_local(src_path: str, dst_path: str) -> None:
    log.info(f'Copying from "{src_path}" to "{dst_path}"')
    with transfer_errors(src_path, dst_path):
        with open(src_path, "rb") as src:
            make_parent_dirs(dst_path)
            with open(dst_path, "wb") as dst:
                shutil.copyfileobj(src, dst, config.COPY_BUFFER_SIZE)


def copy_local_to_remote(client, src_path: str, bucket: str, key: str) -> None:
    """Upload one file; returns only after the object is committed."""
    dst_uri = s3_uri(bucket, key)
    log.info(f'Copying from "{src_path}" to "{dst_uri}"')
    with transfer_errors(src_path, dst_uri):
        with open(src_path, "rb") as src:
            client.upload_fileobj(src, bucket, key, Config=TRANSFER_CONFIG)


def copy_remote_to_local(client, bucket: str, key: str, dst_path: str) -> None:
    """Download one object and sync the local file to durable storage."""
    src_uri = s3_uri(bucket, key)
    log.info(f'Copying from "{src_uri}" to "{dst_path}"')
    with transfer_errors(src_uri, dst_path):
        body = client.get_object(Bucket=bucket, Key=key)["Body"]
        try:
            make_parent_dirs(dst_path)
            with open(dst_path, "wb") as dst:
                shutil.copyfileobj(body, dst, config.COPY_BUFFER_SIZE)
                dst.flush()
                os.fsync(dst.fileno())
        finally:
            body.close()


def copy_remote_to_remote(client, src_bucket: str, src_key: str, dst_bucket: str, dst_key: str) -> None:
    src_uri = s3_uri(src_bucket, src_key)
    dst_uri = s3_uri(dst_bucket, dst_key)
    log.info(f'Copying from "{src_uri}" to "{dst_uri}"')
    with transfer_errors(src_uri, dst_uri):
        client.copy_object(
            CopySource={"Bucket": src_bucket, "Key": src_key},
            Bucket=dst_bucket,
            Key=dst_key,
        )
