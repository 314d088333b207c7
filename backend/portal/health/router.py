import json
import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from portal.config.settings import settings
from portal.health.schemas import HealthResponse
from portal.storage import JsonStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["health"]
)

@router.get("/health", response_model=HealthResponse)
def health_check():
    """Health check endpoint to verify the API is running"""
    logger.info(f"Health check called - Environment: {settings.APP_ENV}")

    return {
        'status': 'healthy',
        'environment': settings.APP_ENV,
        'timestamp': time.time()
    }

@router.get("/health/storage")
def check_storage_health(store: JsonStore = Depends(get_store)):
    """
    Health check for the flat-file store.
    Verifies both JSON files exist and parse as arrays.
    """
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {}
    }

    for name, path in (("feedback", store.feedback_path), ("categories", store.categories_path)):
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, list):
                raise ValueError("file does not hold a JSON array")
            health_status["checks"][name] = {"readable": True, "records": len(data)}
        except Exception as e:
            logger.warning(f"Storage check failed for {path}: {e}")
            health_status["checks"][name] = {"readable": False, "error": str(e)}
            health_status["status"] = "unhealthy"

    status_code = 200 if health_status["status"] == "healthy" else 503
    return JSONResponse(content=health_status, status_code=status_code)
