"""Shared fixtures: a small document root on disk."""

import pytest

from httpd.config import ServerConfig

# 42 bytes
INDEX_BODY = b"<html>" + b"." * 29 + b"</html>"


@pytest.fixture
def index_body() -> bytes:
    return INDEX_BODY


@pytest.fixture
def docroot(tmp_path):
    root = tmp_path / "root"
    root.mkdir()
    (root / "index.html").write_bytes(INDEX_BODY)
    (root / "upload.html").write_bytes(b"<form></form>")
    (root / "logo.GIF").write_bytes(b"GIF89a")
    (root / "blob.bin").write_bytes(bytes(range(256)) * 10)
    (root / "docs").mkdir()
    (root / "docs" / "page.htm").write_bytes(b"<p>page</p>")
    (tmp_path / "secret.txt").write_bytes(b"outside the root")
    return root


@pytest.fixture
def config(docroot) -> ServerConfig:
    return ServerConfig(root=str(docroot))
