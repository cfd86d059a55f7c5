import socket
from http import HTTPStatus

# gevent must patch sockets before anything below creates one
import locust  # noqa: F401
import pytest
from gevent.pywsgi import WSGIServer

from auction_load import locustfile


class AuctionListApp:
    """Stand-in for the auction backend; records every request it sees."""

    def __init__(self):
        self.status = 200
        self.requests = []

    def __call__(self, environ, start_response):
        self.requests.append({
            "method": environ["REQUEST_METHOD"],
            "path": environ["PATH_INFO"],
            "query": environ["QUERY_STRING"],
            "content_type": environ.get("CONTENT_TYPE"),
        })
        status = HTTPStatus(self.status)
        start_response(f"{status.value} {status.phrase}", [("Content-Type", "application/json")])
        return [b'{"success": true, "data": {"content": []}}']


@pytest.fixture
def auction_app():
    app = AuctionListApp()
    server = WSGIServer(("127.0.0.1", 0), app, log=None)
    server.start()
    app.url = f"http://127.0.0.1:{server.server_port}"
    try:
        yield app
    finally:
        server.stop()


@pytest.fixture
def closed_port_url():
    sock = socket.socket()
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return f"http://127.0.0.1:{port}"


@pytest.fixture(autouse=True)
def fresh_checks():
    locustfile.checks.reset()
    yield locustfile.checks
    locustfile.checks.reset()


@pytest.fixture(autouse=True)
def fresh_response_times():
    locustfile.response_times.reset()
    yield locustfile.response_times
    locustfile.response_times.reset()
