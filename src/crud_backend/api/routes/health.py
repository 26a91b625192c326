"""
Health check API route
"""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, HTTPException, Depends

from crud_backend.api.dependencies import get_stores
from crud_backend.database.factory import Stores

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("")
async def health_check(stores: Stores = Depends(get_stores)):
    """
    Health check - reports healthy when every store answers a ping
    """
    try:
        await stores.users.ping()
        await stores.posts.ping()
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        raise HTTPException(status_code=503, detail="Health check failed")

    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "store": stores.backend
    }
