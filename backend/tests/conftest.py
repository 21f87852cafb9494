import pytest


@pytest.fixture
def pipeline_doc():
    """A small pipeline run: two planners feeding a shared transformer chain."""
    return {
        "nodes": {
            "0": {"name": "plan", "type": "planner", "data": {"services": 2}},
            "1": {"name": "collect", "type": "collector"},
            "2": {"name": "dockerfile", "type": "transformer"},
            "3": {"name": "kubernetes", "type": "transformer"},
            "4": {"name": "parameterize", "type": "transformer"},
        },
        "edges": {
            "10": {"from": 0, "to": 2},
            "11": {"from": 1, "to": 2},
            "12": {"from": 2, "to": 3},
            "13": {"from": 3, "to": 4},
            "14": {"from": 2, "to": 4},
        },
    }
