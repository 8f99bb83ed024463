"""Development server with live reload, backed by ``livereload``.

The server serves the development output tree, opens the browser once it is
listening, and watches the source tree. The watcher polls on the server's
event loop and runs its callback there, so a change that lands while a
compile is running is picked up by the next poll instead of starting a
second, overlapping compile.
"""

from __future__ import annotations

from collections.abc import Callable

from livereload import Server
from livereload.handlers import LiveReloadHandler

from webic.config import AppConfig

OPEN_BROWSER_DELAY = 1


class DevServer:
    """Live-reload server for one ``webic dev`` run."""

    def __init__(self, config: AppConfig, server_factory: Callable[[], Server] = Server) -> None:
        self.config = config
        self._server_factory = server_factory
        self._server: Server | None = None

    @property
    def url(self) -> str:
        return f"http://localhost:{self.config.port}"

    @property
    def server(self) -> Server:
        if self._server is None:
            raise RuntimeError("Development server has not been opened")
        return self._server

    def open(self) -> None:
        """Create the server; it starts listening in :meth:`serve`."""
        self._server = self._server_factory()

    def watch(self, on_change: Callable[[], None]) -> None:
        """Call *on_change* whenever anything under the source root changes.

        Browsers are reloaded by :meth:`reload` once the callback is done,
        never by the watcher itself.
        """
        self.server.watch(
            str(self.config.path(self.config.source.root)),
            on_change,
            delay="forever",
        )

    def reload(self) -> None:
        """Tell every connected browser to reload."""
        LiveReloadHandler.reload_waiters()

    def serve(self) -> None:
        """Serve the development tree; blocks until interrupted."""
        self.server.serve(
            port=self.config.port,
            host="localhost",
            root=str(self.config.path(self.config.dev.root)),
            open_url_delay=OPEN_BROWSER_DELAY,
        )
