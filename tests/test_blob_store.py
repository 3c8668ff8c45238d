from __future__ import annotations

import pytest

from core.errors import BlobNotFoundError, BlobStoreError
from core.services.interfaces import Directory
from infrastructure.blob_store import FileSystemBlobStore


def test_write_then_read_bytes_and_text(blob_store):
    result = blob_store.write("a.jpeg", b"\x01\x02", Directory.DATA)
    assert result.uri.startswith("file://")
    assert result.uri.endswith("/data/a.jpeg")
    assert blob_store.read("a.jpeg", Directory.DATA).data == b"\x01\x02"

    blob_store.write("notes.txt", "línea\n", Directory.DATA)
    assert blob_store.read("notes.txt", Directory.DATA, encoding="utf-8").data == "línea\n"


def test_overwrite_is_idempotent(blob_store):
    blob_store.write("log.txt", "one", Directory.DATA)
    blob_store.write("log.txt", "two", Directory.DATA)
    blob_store.write("log.txt", "two", Directory.DATA)
    assert blob_store.read("log.txt", Directory.DATA, encoding="utf-8").data == "two"


def test_read_by_uri_without_directory(blob_store):
    uri = blob_store.write("b.jpeg", b"xyz", Directory.CACHE).uri
    assert blob_store.read(uri).data == b"xyz"


def test_missing_blob(blob_store):
    with pytest.raises(BlobNotFoundError):
        blob_store.read("nope.jpeg", Directory.DATA)
    with pytest.raises(BlobNotFoundError):
        blob_store.delete("nope.jpeg")


def test_nested_write_needs_recursive(blob_store):
    with pytest.raises(BlobStoreError):
        blob_store.write("sub/dir/c.txt", "x", Directory.DOCUMENTS)
    blob_store.write("sub/dir/c.txt", "x", Directory.DOCUMENTS, recursive=True)
    assert blob_store.exists("sub/dir/c.txt", Directory.DOCUMENTS)


def test_path_cannot_escape_directory(blob_store):
    with pytest.raises(BlobStoreError):
        blob_store.write("../outside.txt", "x", Directory.DATA)


def test_undecodable_text(blob_store):
    blob_store.write("bin.dat", b"\xff\xfe\xfa", Directory.DATA)
    with pytest.raises(BlobStoreError):
        blob_store.read("bin.dat", Directory.DATA, encoding="utf-8")


def test_root_is_created(tmp_path):
    store = FileSystemBlobStore(tmp_path / "new" / "root")
    assert store.root.is_dir()
