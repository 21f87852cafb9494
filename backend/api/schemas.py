"""Pydantic response schemas for API."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str = "ok"
    nodes: int
    edges: int
