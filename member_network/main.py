"""
Member Network Platform - Main Application

FastAPI backend with:
- PostgreSQL (SQLAlchemy) or MongoDB storage behind one repository interface
- JWT authentication with role-based access
- Admin review of members and listings

Run: uvicorn member_network.main:app --reload
"""

import logging

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware

from member_network import __version__
from member_network.api.routes import api_router
from member_network.core.config import get_settings
from member_network.core.logging_config import configure_logging
from member_network.repositories import Storage, get_storage

settings = get_settings()
configure_logging()
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Member Network Platform",
    description="""
    A membership-and-opportunity network for professionals, job seekers,
    employers, business owners and investors.

    ## Features
    - **Authentication**: JWT bearer tokens, registration completed with profile and roles
    - **Membership**: Admin approval of new members (pending / approved / rejected)
    - **Opportunities**: Jobs, investment, partnership and collaboration listings
    - **Applications**: Job applications with a review workflow
    - **Investor interest**: Investors reach out to business listings
    - **Content**: Leaders, gallery and videos for the public site

    ## Storage
    - `STORAGE_BACKEND=sql`: PostgreSQL (any SQLAlchemy URL)
    - `STORAGE_BACKEND=mongo`: MongoDB
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


# Startup event
@app.on_event("startup")
async def startup_event():
    """Create tables / indexes for the configured storage."""
    try:
        get_storage().init()
        logger.info("Storage initialized (%s backend)", settings.storage_backend)
    except Exception as e:
        logger.warning("Storage initialization failed: %s", e)


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "Member Network Platform", "version": __version__}


@app.get("/health", tags=["Health"])
async def health_check(storage: Storage = Depends(get_storage)):
    """Detailed health check."""
    connected = storage.ping()
    return {
        "status": "healthy" if connected else "degraded",
        "storage": settings.storage_backend,
        "database": "connected" if connected else "disconnected",
    }
