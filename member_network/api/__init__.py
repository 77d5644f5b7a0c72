"""
API module - FastAPI routers and endpoint definitions.

Usage:
    from member_network.api import api_router
    app.include_router(api_router, prefix="/api")
"""

from member_network.api.routes import api_router

__all__ = ["api_router"]
