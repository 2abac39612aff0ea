"""
Winter Clothing Backend API Server
Core functionality: user registration/login, winter clothing, testimonials and comments
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import MONGODB_URI, DB_NAME, ALLOWED_ORIGINS, ENABLE_COMMUNITY_ROUTES
from database.connection import MongoDatabase
from api.routes import health, auth, winter_clothes, testimonials, comments
from utils.error_handling import setup_error_handling

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the shared database handle on startup and close it on shutdown"""
    database = MongoDatabase(MONGODB_URI, DB_NAME)
    await database.connect()
    await database.ensure_indexes()
    app.state.database = database
    yield
    await database.close()

def create_app(enable_community_routes: bool = ENABLE_COMMUNITY_ROUTES) -> FastAPI:
    app = FastAPI(
        title="Winter Clothing Backend",
        description="Backend API for winter clothing donations, testimonials and comments",
        version="1.0.0",
        lifespan=lifespan
    )

    # Credentials cannot be combined with a wildcard origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials="*" not in ALLOWED_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    setup_error_handling(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(auth.router, prefix=API_PREFIX, tags=["Users"])
    app.include_router(winter_clothes.router, prefix=API_PREFIX, tags=["Winter Clothes"])

    if enable_community_routes:
        app.include_router(testimonials.router, prefix=API_PREFIX, tags=["Testimonials"])
        app.include_router(comments.router, prefix=API_PREFIX, tags=["Comments"])
    else:
        logger.info("Testimonial and comment routes disabled")

    return app

app = create_app()

# FastAPI app instance is exported for use by uvicorn
# Server startup is handled by main.py at the project root
