"""s3copy — copy files and directory trees between local disk and S3."""

__version__ = "0.1.0"
