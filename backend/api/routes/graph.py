"""Graph API - GET /api/graph returns the laid-out WebGraph in wire format."""

from fastapi import APIRouter
from fastapi.responses import Response

from shared.wire import encode_web_graph

from .. import state as api_state

router = APIRouter()


@router.get("")
async def get_graph():
    return Response(content=encode_web_graph(api_state.web_graph), media_type="application/json")
