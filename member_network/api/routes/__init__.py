"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from member_network.api.routes.auth_routes import router as auth_router
from member_network.api.routes.profile_routes import router as profile_router
from member_network.api.routes.opportunity_routes import router as opportunity_router
from member_network.api.routes.application_routes import router as application_router
from member_network.api.routes.admin_routes import router as admin_router
from member_network.api.routes.content_routes import router as content_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(profile_router)
api_router.include_router(opportunity_router)
api_router.include_router(application_router)
api_router.include_router(admin_router)
api_router.include_router(content_router)
