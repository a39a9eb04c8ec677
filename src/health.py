"""Minimal HTTP liveness endpoint.

Hosting platforms probe this port to decide whether the bot is alive; every
request gets the same 200 answer.
"""

from __future__ import annotations

import logging
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

LOGGER = logging.getLogger(__name__)

HEALTH_TEXT = "Discord Bot is running!"


class HealthHandler(BaseHTTPRequestHandler):
    def _respond(self, include_body: bool = True) -> None:
        encoded = HEALTH_TEXT.encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", "text/plain; charset=utf-8")
        self.send_header("Cache-Control", "no-store")
        self.send_header("Content-Length", str(len(encoded)))
        self.end_headers()
        if include_body:
            self.wfile.write(encoded)

    def do_GET(self):
        self._respond()

    def do_POST(self):
        self._respond()

    def do_HEAD(self):
        self._respond(include_body=False)

    def log_message(self, format, *args):
        LOGGER.debug("health %s - %s", self.address_string(), format % args)


def start_health_server(host: str, port: int) -> ThreadingHTTPServer:
    """Serve the liveness endpoint from a daemon thread and return the server."""

    server = ThreadingHTTPServer((host, port), HealthHandler)
    thread = threading.Thread(target=server.serve_forever, name="health-server", daemon=True)
    thread.start()
    LOGGER.info("Health endpoint listening on %s:%s", host, server.server_address[1])
    return server
