"""Live-reload notification channel backed by a livereload server."""

from __future__ import annotations

import os
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from livereload import Server
from livereload.handlers import LiveReloadHandler

from ..config import PipelineConfig
from ..logging import get_logger
from ..paths import to_posix

Broadcaster = Callable[[str], None]
Sink = Callable[[Iterable[Path]], List[Path]]

FULL_RELOAD = "*"


def _broadcast_to_waiters(path: str) -> None:
    LiveReloadHandler.reload_waiters(path)


class LiveReloadChannel:
    """Process-wide channel pushing refresh notifications to browsers.

    ``init`` may be called once per process. Sinks created by :meth:`stream`
    before that are silent, so one-shot builds can share the same graphs as
    the watch loop.
    """

    def __init__(
        self,
        server_factory: Callable[[], Server] = Server,
        broadcaster: Broadcaster | None = None,
    ) -> None:
        self._server_factory = server_factory
        self._broadcast = broadcaster or _broadcast_to_waiters
        self._server: Optional[Server] = None
        self._config: Optional[PipelineConfig] = None
        self.logger = get_logger("serve")

    def init(self, config: PipelineConfig) -> None:
        if self._server is not None:
            raise RuntimeError("Live-reload channel is already initialised")
        self._server = self._server_factory()
        self._config = config

    def watch(self, pattern: str, callback: Callable[[], object]) -> None:
        """Run ``callback`` when files matching ``pattern`` change.

        The server's own reload is suppressed; callbacks notify through
        :meth:`stream` sinks or :meth:`reload`.
        """
        self._require_server().watch(pattern, callback, delay="forever")

    def stream(self, match: str = "**/*.css") -> Sink:
        """Return a sink that announces written files matching ``match``."""

        def sink(paths: Iterable[Path]) -> List[Path]:
            if self._server is None:
                return []
            notified: List[Path] = []
            for path in paths:
                if not fnmatchcase(to_posix(path), match):
                    continue
                self._broadcast(self._public_path(path))
                notified.append(path)
            return notified

        return sink

    def reload(self) -> None:
        if self._server is None:
            return
        self.logger.info("Reloading connected browsers")
        self._broadcast(FULL_RELOAD)

    def serve(self) -> None:
        """Serve the pages and block until the process is interrupted."""
        server = self._require_server()
        config = self._config
        assert config is not None
        settings = config.serve
        root = config.resolve(config.html.base)
        self.logger.info("Serving %s on http://%s:%d", root, settings.host, settings.port)
        server.serve(
            host=settings.host,
            port=settings.port,
            root=str(root),
            open_url_delay=0.5 if settings.open else None,
            live_css=settings.live_css,
            default_filename=config.html.index,
        )

    def _public_path(self, path: Path) -> str:
        if self._config is None:
            return to_posix(path)
        try:
            return to_posix(
                os.path.relpath(Path(path).resolve(), self._config.resolve(self._config.html.base))
            )
        except ValueError:
            return to_posix(path)

    def _require_server(self) -> Server:
        if self._server is None:
            raise RuntimeError("Live-reload channel has not been initialised")
        return self._server


__all__ = ["FULL_RELOAD", "LiveReloadChannel"]
