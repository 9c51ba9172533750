from __future__ import annotations

import urllib.error
import urllib.request
from pathlib import Path

import pytest

from exporter.server import StaticFileServer


def test_serves_files_from_root(tmp_path: Path) -> None:
    (tmp_path / "chapter1").mkdir()
    (tmp_path / "chapter1" / "slide01.html").write_text("<h1>Hello</h1>", encoding="utf-8")

    with StaticFileServer(tmp_path, port=0) as server:
        assert server.port != 0
        url = server.url_for("chapter1/slide01.html")
        with urllib.request.urlopen(url, timeout=5) as response:
            assert response.status == 200
            assert response.headers["Content-Type"].startswith("text/html")
            assert response.read() == b"<h1>Hello</h1>"


def test_missing_file_is_404(tmp_path: Path) -> None:
    with StaticFileServer(tmp_path, port=0) as server:
        with pytest.raises(urllib.error.HTTPError) as excinfo:
            urllib.request.urlopen(server.url_for("/nope.html"), timeout=5)
    assert excinfo.value.code == 404


def test_url_for_strips_leading_slash(tmp_path: Path) -> None:
    server = StaticFileServer(tmp_path, port=9876)
    assert server.url_for("/a/b.html") == "http://localhost:9876/a/b.html"
