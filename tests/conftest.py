import io

import pytest
from botocore.exceptions import ClientError


def _client_error(code, operation):
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class FakePaginator:
    def __init__(self, s3, page_size):
        self.s3 = s3
        self.page_size = page_size

    def paginate(self, Bucket, Prefix=""):
        self.s3.calls.append(("list_objects_v2", Bucket, Prefix))
        if self.s3.list_error:
            raise _client_error(self.s3.list_error, "ListObjectsV2")
        keys = sorted(k for b, k in self.s3.objects if b == Bucket and k.startswith(Prefix))
        if not keys:
            yield {"KeyCount": 0}
            return
        for i in range(0, len(keys), self.page_size):
            yield {"Contents": [{"Key": k} for k in keys[i:i + self.page_size]]}


class FakeS3:
    """In-memory stand-in for the handful of S3 client calls s3copy makes."""

    def __init__(self, objects=None, page_size=2):
        self.objects = dict(objects or {})
        self.page_size = page_size
        self.calls = []
        self.list_error = None

    def get_paginator(self, name):
        assert name == "list_objects_v2"
        return FakePaginator(self, self.page_size)

    def get_object(self, Bucket, Key):
        self.calls.append(("get_object", Bucket, Key))
        if (Bucket, Key) not in self.objects:
            raise _client_error("NoSuchKey", "GetObject")
        return {"Body": io.BytesIO(self.objects[(Bucket, Key)])}

    def upload_fileobj(self, Fileobj, Bucket, Key, Config=None):
        self.calls.append(("upload_fileobj", Bucket, Key, Config))
        self.objects[(Bucket, Key)] = Fileobj.read()

    def copy_object(self, CopySource, Bucket, Key):
        self.calls.append(("copy_object", CopySource["Bucket"], CopySource["Key"], Bucket, Key))
        src = (CopySource["Bucket"], CopySource["Key"])
        if src not in self.objects:
            raise _client_error("NoSuchKey", "CopyObject")
        self.objects[(Bucket, Key)] = self.objects[src]
        return {"CopyObjectResult": {"ETag": '"etag"'}}

    def operations(self):
        return [c[0] for c in self.calls]


@pytest.fixture
def fake_s3():
    return FakeS3()


def write_tree(root, files):
    """Create {relative_path: bytes} under root."""
    for rel, data in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)


def read_tree(root):
    return {
        str(p.relative_to(root)).replace("\\", "/"): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }
