from __future__ import annotations

import urllib.request

from health import HEALTH_TEXT, start_health_server


def test_health_endpoint_answers_every_method() -> None:
    server = start_health_server("127.0.0.1", 0)
    try:
        base = f"http://127.0.0.1:{server.server_address[1]}/anything"

        with urllib.request.urlopen(base, timeout=5) as response:
            assert response.status == 200
            assert response.headers["Content-Type"].startswith("text/plain")
            assert response.read().decode("utf-8") == HEALTH_TEXT

        post = urllib.request.Request(base, data=b"ping", method="POST")
        with urllib.request.urlopen(post, timeout=5) as response:
            assert response.read().decode("utf-8") == HEALTH_TEXT

        head = urllib.request.Request(base, method="HEAD")
        with urllib.request.urlopen(head, timeout=5) as response:
            assert response.status == 200
            assert response.read() == b""
    finally:
        server.shutdown()
        server.server_close()
