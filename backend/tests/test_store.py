import asyncio
import os

import orjson
import pytest

from shared.errors import GraphIOError, MalformedGraphError, SerializationError
from shared.wire import build_web_graph, decode_web_graph
from store import load_raw_graph, write_web_graph

from helpers import laid_out


@pytest.fixture
def web_graph():
    nodes, edges = laid_out(["A", "B", "C"], [("A", "B"), ("A", "C")])
    return build_web_graph(nodes, edges)


class TestLoad:

    def test_load(self, tmp_path, pipeline_doc):
        path = tmp_path / "graph.json"
        path.write_bytes(orjson.dumps(pipeline_doc))
        raw = asyncio.run(load_raw_graph(path))
        assert len(raw.nodes) == 5
        assert len(raw.edges) == 5

    def test_missing_file(self, tmp_path):
        with pytest.raises(GraphIOError) as exc:
            asyncio.run(load_raw_graph(tmp_path / "nope.json"))
        assert exc.value.path.endswith("nope.json")
        assert isinstance(exc.value, IOError)

    def test_directory(self, tmp_path):
        with pytest.raises(GraphIOError):
            asyncio.run(load_raw_graph(tmp_path))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "graph.json"
        path.write_text("{nodes:")
        with pytest.raises(MalformedGraphError, match="Invalid JSON"):
            asyncio.run(load_raw_graph(path))

    def test_wrong_shape(self, tmp_path):
        path = tmp_path / "graph.json"
        path.write_text('{"edges": []}')
        with pytest.raises(MalformedGraphError):
            asyncio.run(load_raw_graph(path))


class TestWrite:

    def test_write(self, tmp_path, web_graph):
        path = tmp_path / "out.json"
        assert asyncio.run(write_web_graph(path, web_graph)) == path
        assert decode_web_graph(path.read_bytes()) == web_graph
        assert not (tmp_path / "out.json.tmp").exists()

    def test_overwrite(self, tmp_path, web_graph):
        path = tmp_path / "out.json"
        path.write_text("old")
        asyncio.run(write_web_graph(str(path), web_graph))
        assert decode_web_graph(path.read_bytes()) == web_graph

    def test_missing_parent_directory(self, tmp_path, web_graph):
        path = tmp_path / "missing" / "out.json"
        with pytest.raises(IOError):
            asyncio.run(write_web_graph(path, web_graph))
        assert not path.exists()
        assert not (tmp_path / "missing").exists()

    def test_directory_target(self, tmp_path, web_graph):
        with pytest.raises(GraphIOError):
            asyncio.run(write_web_graph(tmp_path, web_graph))
        assert list(tmp_path.iterdir()) == []

    @pytest.mark.skipif(os.name != "posix" or os.geteuid() == 0, reason="needs POSIX permissions as non-root")
    def test_read_only_directory(self, tmp_path, web_graph):
        out_dir = tmp_path / "readonly"
        out_dir.mkdir()
        out_dir.chmod(0o500)
        path = out_dir / "out.json"
        try:
            with pytest.raises(GraphIOError) as exc:
                asyncio.run(write_web_graph(path, web_graph))
            assert exc.value.path == str(path)
            assert not path.exists()
            assert not (out_dir / "out.json.tmp").exists()
        finally:
            out_dir.chmod(0o700)

    def test_encode_failure_writes_nothing(self, tmp_path, web_graph, monkeypatch):
        def fail(*args, **kwargs):
            raise TypeError("Type is not JSON serializable")

        monkeypatch.setattr(orjson, "dumps", fail)
        path = tmp_path / "out.json"
        with pytest.raises(SerializationError):
            asyncio.run(write_web_graph(path, web_graph))
        assert list(tmp_path.iterdir()) == []
