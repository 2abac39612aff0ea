"""
Health check API routes
"""

import logging
from datetime import datetime
from fastapi import APIRouter, HTTPException, Depends

from database.connection import MongoDatabase, get_database

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/")
async def server_status():
    """Liveness message; does not touch the database"""
    return {
        "message": "Server is running smoothly",
        "timestamp": datetime.utcnow().isoformat()
    }

@router.get("/health")
async def health_check(db: MongoDatabase = Depends(get_database)):
    """Health check including database connectivity"""
    try:
        await db.ping()
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        raise HTTPException(status_code=503, detail=f"Health check failed: {str(e)}")

    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "database": "connected"
    }
