"""
Simple HTTP Server Component

A minimal HTTP server mounted into an application through a component.

Run with ``python examples/http_serve/app.py`` and stop with Ctrl+C.
"""

import asyncio
import json
from http.server import HTTPServer, BaseHTTPRequestHandler
from threading import Thread
from typing import Optional

import pydantic

from bindkit import Application, CoreBindings, component, inject, load_settings, setup_logging


class ServerConfig(pydantic.BaseModel):
    """HTTP Server configuration."""
    host: str = "127.0.0.1"
    port: int = 8080


class ServerConfigProvider:
    def value(self) -> ServerConfig:
        return ServerConfig()


class InfoController:
    def __init__(self, settings=inject(CoreBindings.APPLICATION_CONFIG)):
        self.settings = settings

    def info(self) -> dict:
        return {"name": self.settings.name, "version": "1.0.0"}


def make_handler(controller: InfoController) -> type[BaseHTTPRequestHandler]:
    class RequestHandler(BaseHTTPRequestHandler):
        """Simple HTTP request handler."""

        def do_GET(self):
            if self.path == "/health":
                self._send(200, {"status": "healthy"})
            elif self.path == "/info":
                self._send(200, controller.info())
            else:
                self._send(404, {"error": "Not Found"})

        def _send(self, status: int, body: dict) -> None:
            self.send_response(status)
            self.send_header("Content-Type", "application/json")
            self.end_headers()
            self.wfile.write(json.dumps(body).encode())

        def log_message(self, format, *args):
            """Suppress default logging."""
            pass

    return RequestHandler


class HttpServer:
    """Serves the info controller over HTTP in a background thread."""

    def __init__(
            self,
            config=inject("http.config"),
            controller=inject("controllers.InfoController"),
            logger=inject(CoreBindings.APPLICATION_LOGGER)
    ):
        self.config = config
        self.controller = controller
        self.logger = logger
        self.listening = False
        self._server: Optional[HTTPServer] = None
        self._thread: Optional[Thread] = None

    async def start(self) -> None:
        self.logger.info("Starting HTTP server on %s:%s", self.config.host, self.config.port)
        self._server = HTTPServer((self.config.host, self.config.port), make_handler(self.controller))
        self._thread = Thread(target=self._server.serve_forever, daemon=True)
        self._thread.start()
        self.listening = True

    async def stop(self) -> None:
        if self._server is None:
            return
        self.logger.info("Stopping HTTP server")
        # shutdown() blocks until serve_forever returns
        await asyncio.to_thread(self._server.shutdown)
        self._server.server_close()
        self._server = None
        self.listening = False


@component(
    providers={"http.config": ServerConfigProvider},
    controllers=[InfoController],
    servers={"http": HttpServer},
)
class HttpComponent:
    pass


async def main() -> None:
    settings = load_settings(name="http-demo")
    setup_logging(settings)

    app = Application(settings)
    app.component(HttpComponent)

    await app.start()
    try:
        while True:
            await asyncio.sleep(1)
    finally:
        await app.stop()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
