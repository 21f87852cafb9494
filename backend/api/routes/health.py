"""Health API - GET /api/health."""

from fastapi import APIRouter

from .. import state as api_state
from ..schemas import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
async def health():
    graph = api_state.web_graph
    return HealthResponse(nodes=len(graph.nodes), edges=len(graph.edges))
