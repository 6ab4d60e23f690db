"""
Conversion Server
=================

Process-wide server object owning the FastAPI application and the uvicorn
listener. Built once at startup, started and stopped explicitly.
"""

from typing import Optional
import asyncio

import uvicorn

from html2pdf.api.main import create_app
from html2pdf.config.logging import get_logger
from html2pdf.config.settings import Settings, get_settings

logger = get_logger(__name__)


class ConversionServer:
    """HTTP server for the HTML to PDF service."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.app = create_app(self.settings)
        self._server: Optional[uvicorn.Server] = None

    def _build_server(self) -> uvicorn.Server:
        config = uvicorn.Config(
            self.app,
            host=self.settings.host,
            port=self.settings.port,
            log_level=self.settings.log_level.lower(),
            # Logging is configured by create_app; keep uvicorn from replacing it.
            log_config=None,
            access_log=True,
        )
        return uvicorn.Server(config)

    @property
    def is_running(self) -> bool:
        return self._server is not None and self._server.started

    async def start(self) -> None:
        """
        Bind the listener and serve requests.

        Returns once ``stop()`` is called or the process receives SIGINT or
        SIGTERM.
        """
        if self._server is not None:
            raise RuntimeError("Server is already running")

        self._server = self._build_server()
        logger.info("Starting server", host=self.settings.host, port=self.settings.port)
        try:
            await self._server.serve()
        finally:
            self._server = None
            logger.info("Server stopped")

    def stop(self) -> None:
        """Ask a running server to finish in-flight requests and exit."""
        if self._server is not None:
            logger.info("Server stop requested")
            self._server.should_exit = True

    def run(self) -> None:
        """Run the server in a new event loop until it stops."""
        asyncio.run(self.start())


def main() -> None:
    """Console entry point."""
    ConversionServer().run()


if __name__ == "__main__":
    main()
