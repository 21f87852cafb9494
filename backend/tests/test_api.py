import threading
import time

import pytest
import socketio
import uvicorn
from fastapi.testclient import TestClient

import config
from api import create_app, create_asgi_app
from serving import bind_socket
from shared.wire import build_web_graph, to_wire

from helpers import laid_out


@pytest.fixture
def web_graph():
    nodes, edges = laid_out(["A", "B", "C"], [("A", "B"), ("A", "C"), ("C", "A")])
    return build_web_graph(nodes, edges)


@pytest.fixture
def client(web_graph):
    return TestClient(create_app(web_graph))


def test_graph_endpoint(client, web_graph):
    r = client.get("/api/graph")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("application/json")
    assert r.json() == to_wire(web_graph)
    assert "no-store" in r.headers["cache-control"]


def test_graph_endpoint_is_stable_across_requests(client):
    assert client.get("/api/graph").content == client.get("/api/graph").content


def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "nodes": 3, "edges": 3}


def test_viewer_shell(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    assert "/api/graph" in r.text


def test_viewer_shell_fallback(client, tmp_path, monkeypatch):
    monkeypatch.setattr(config, "FRONTEND_DIR", tmp_path)
    r = client.get("/")
    assert r.status_code == 200
    assert "Pipeline Graph" in r.text


def test_asgi_app_forwards_to_api(web_graph):
    client = TestClient(create_asgi_app(web_graph))
    r = client.get("/api/graph")
    assert r.status_code == 200
    assert r.json() == to_wire(web_graph)


@pytest.fixture
def live_server(web_graph):
    """Run the Socket.io-wrapped app under uvicorn in a thread; yields its base URL."""
    sock = bind_socket("127.0.0.1", 0)
    port = sock.getsockname()[1]
    server = uvicorn.Server(uvicorn.Config(create_asgi_app(web_graph), log_level="warning"))
    thread = threading.Thread(target=server.run, kwargs={"sockets": [sock]}, daemon=True)
    thread.start()
    deadline = time.monotonic() + 10
    while not server.started:
        if not thread.is_alive() or time.monotonic() > deadline:
            raise RuntimeError("graph server did not start")
        time.sleep(0.05)
    yield f"http://127.0.0.1:{port}"
    server.should_exit = True
    thread.join(timeout=10)
    sock.close()


def test_socketio_pushes_graph_on_connect(live_server, web_graph):
    with socketio.SimpleClient() as sio:
        sio.connect(live_server, transports=["polling"])
        event, payload = sio.receive(timeout=5)
    assert event == "graph-data"
    assert payload == to_wire(web_graph)
