"""
Health check API routes
"""

from datetime import datetime
from fastapi import APIRouter, HTTPException, Depends

from api.dependencies import get_store
from database.store import EntityStore, StoreError

router = APIRouter()

@router.get("/")
async def root():
    return {"message": "Luxury Drive API is running"}

@router.get("/health")
async def health_check(store: EntityStore = Depends(get_store)):
    """Health check - reports store connectivity"""
    try:
        await store.ping()
    except StoreError as e:
        raise HTTPException(status_code=503, detail=f"Health check failed: {str(e)}")

    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "database": "connected"
    }
