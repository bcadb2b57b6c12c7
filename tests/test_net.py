import socket
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from samplerlib.config import DEFAULT_HEADERS
from samplerlib.net import HttpClient


PAGE = b'<html><body><a href="/next">next</a></body></html>'


class Handler(BaseHTTPRequestHandler):
    protocol_version = "HTTP/1.1"

    def log_message(self, format, *args):
        pass

    def _send(self, status, body=b"", headers=None):
        self.send_response(status)
        for name, value in (headers or {}).items():
            self.send_header(name, value)
        self.send_header("Content-Type", "text/html; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(body)

    def do_GET(self):
        # /hop/<n> redirects n times before landing on the page
        if self.path.startswith("/hop/"):
            remaining = int(self.path.rsplit("/", 1)[1])
            if remaining > 0:
                self._send(302, headers={"Location": f"/hop/{remaining - 1}"})
                return
            self._send(200, PAGE)
        elif self.path == "/nohead":
            self._send(200, PAGE * 50)
        else:
            self._send(404, b"missing")

    def do_HEAD(self):
        if self.path == "/nohead":
            self._send(405)
        else:
            self.do_GET()


@pytest.fixture
def server():
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{httpd.server_address[1]}"
    httpd.shutdown()
    httpd.server_close()


def make_client(max_redirects=5):
    return HttpClient(DEFAULT_HEADERS, request_timeout=5.0, max_redirects=max_redirects)


def test_follows_redirect_chain_up_to_limit(server):
    client = make_client(max_redirects=5)
    assert client.probe(f"{server}/hop/3") == 200
    result = client.fetch(f"{server}/hop/4")
    assert result.status == 200
    assert "next" in result.text


def test_redirect_chain_over_limit_is_unreachable(server):
    client = make_client(max_redirects=2)
    assert client.probe(f"{server}/hop/2") == 200
    assert client.probe(f"{server}/hop/3") is None
    assert client.fetch(f"{server}/hop/3") is None


def test_head_refused_falls_back_to_get(server):
    client = make_client()
    assert [client.probe(f"{server}/nohead") for _ in range(3)] == [200, 200, 200]
    assert client.probe(f"{server}/missing") == 404


def test_refused_connection_is_unreachable():
    sock = socket.socket()
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    client = make_client()
    assert client.probe(f"http://127.0.0.1:{port}/") is None
    assert client.fetch(f"http://127.0.0.1:{port}/") is None
