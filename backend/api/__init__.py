"""
API module - app factory, routes and schemas.
Routes are split by concern: graph data, health, viewer shell.
"""

from .app import create_app, create_asgi_app
from .routes import register_routes

__all__ = ["create_app", "create_asgi_app", "register_routes"]
