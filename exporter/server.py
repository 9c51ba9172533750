import functools
import http.server
import threading
from pathlib import Path
from typing import Optional

import termcolor


class _QuietHandler(http.server.SimpleHTTPRequestHandler):
    debug = False

    def log_message(self, format: str, *args) -> None:
        if self.debug:
            termcolor.cprint(f"[server] {format % args}", color="cyan")


class StaticFileServer:
    """Serves a directory on localhost from a background thread."""

    def __init__(self, root: Path, port: int = 9876, debug: bool = False):
        self._root = Path(root)
        self._port = port
        self._debug = debug
        self._httpd: Optional[http.server.ThreadingHTTPServer] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def port(self) -> int:
        if self._httpd is None:
            return self._port
        return self._httpd.server_address[1]

    def url_for(self, relative_path: str) -> str:
        return f"http://localhost:{self.port}/{relative_path.lstrip('/')}"

    def __enter__(self):
        handler = type("_Handler", (_QuietHandler,), {"debug": self._debug})
        self._httpd = http.server.ThreadingHTTPServer(
            ("localhost", self._port),
            functools.partial(handler, directory=str(self._root)),
        )
        self._thread = threading.Thread(
            target=self._httpd.serve_forever, name="static-file-server", daemon=True
        )
        self._thread.start()
        termcolor.cprint(f"  Server running at http://localhost:{self.port}", color="cyan")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._httpd is not None:
            self._httpd.shutdown()
            self._httpd.server_close()
            self._httpd = None
        if self._thread is not None:
            self._thread.join(timeout=5)
            self._thread = None
