"""
config.py — Environment-driven settings for s3copy.

Environment variables (with sane defaults):
  LOG_LEVEL         : Python logging level (default: INFO)
  S3_ENDPOINT_URL   : Custom S3-compatible endpoint (fallback: AWS_ENDPOINT_URL)
  S3_REGION         : Client region (fallback: AWS_DEFAULT_REGION)
  COPY_BUFFER_SIZE  : Buffer size in bytes for local stream copies (default: 1 MiB)

Credentials are resolved by the standard boto3 chain (env, ~/.aws, instance role).
"""

import os

# Tunables (read once at import time so every transfer in a run is consistent)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

S3_ENDPOINT_URL = os.environ.get("S3_ENDPOINT_URL", os.environ.get("AWS_ENDPOINT_URL")) or None
S3_REGION = os.environ.get("S3_REGION", os.environ.get("AWS_DEFAULT_REGION")) or None

COPY_BUFFER_SIZE = int(os.environ.get("COPY_BUFFER_SIZE", str(1024 * 1024)))  # 1 MiB
