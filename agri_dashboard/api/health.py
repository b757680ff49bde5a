"""
Health check and monitoring API endpoints
"""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from datetime import datetime
import logging
import platform
import psutil

from ..database import get_db
from ..config import settings

router = APIRouter(tags=["health"])
logger = logging.getLogger(__name__)

BOUNDARY_TABLES = ("region", "zone", "woreda")

def system_usage() -> dict:
    """Process host CPU and memory usage"""
    memory = psutil.virtual_memory()
    return {
        "cpu_percent": psutil.cpu_percent(interval=None),
        "memory_percent": memory.percent,
        "memory_available_gb": round(memory.available / (1024**3), 2),
    }

# =====================================
# HEALTH CHECK ENDPOINTS
# =====================================

@router.get("/health")
async def health_check(db: Session = Depends(get_db)):
    """
    Health check for the database and host resources
    """

    health_status = {
        "service": settings.PROJECT_NAME,
        "timestamp": datetime.utcnow().isoformat(),
        "status": "healthy",
        "checks": {}
    }

    # Database health check
    try:
        start_time = datetime.utcnow()
        db.execute(text("SELECT 1"))
        health_status["checks"]["database"] = {
            "status": "healthy",
            "response_time_ms": round((datetime.utcnow() - start_time).total_seconds() * 1000, 2)
        }
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        health_status["checks"]["database"] = {
            "status": "unhealthy",
            "error": str(e)
        }
        health_status["status"] = "unhealthy"

    # Host resources
    usage = system_usage()
    health_status["checks"]["system"] = {
        "status": "healthy" if usage["memory_percent"] < 95 else "degraded",
        **usage
    }
    if health_status["checks"]["system"]["status"] == "degraded" and health_status["status"] == "healthy":
        health_status["status"] = "degraded"

    return health_status

@router.get("/health/simple")
async def simple_health_check():
    """
    Simple health check for load balancers
    """
    return {"status": "ok", "timestamp": datetime.utcnow().isoformat()}

@router.get("/health/database")
async def database_health_check(db: Session = Depends(get_db)):
    """
    Detailed database health check with boundary table row counts
    """

    try:
        start_time = datetime.utcnow()
        result = db.execute(text("SELECT 1")).scalar()
        response_time = (datetime.utcnow() - start_time).total_seconds() * 1000

        counts = {}
        for table in BOUNDARY_TABLES:
            counts[table] = db.execute(text(f"SELECT COUNT(*) FROM {table}")).scalar()

        return {
            "status": "healthy",
            "response_time_ms": round(response_time, 2),
            "connection_successful": result == 1,
            "boundary_counts": counts,
            "timestamp": datetime.utcnow().isoformat()
        }

    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        return {
            "status": "unhealthy",
            "error": str(e),
            "timestamp": datetime.utcnow().isoformat()
        }

# =====================================
# METRICS ENDPOINTS
# =====================================

@router.get("/metrics")
async def get_system_metrics():
    """
    Get system performance metrics
    """

    try:
        return {
            "timestamp": datetime.utcnow().isoformat(),
            "system": system_usage(),
        }
    except psutil.Error as e:
        raise HTTPException(status_code=500, detail=f"Failed to get metrics: {str(e)}")

@router.get("/metrics/prometheus", response_class=PlainTextResponse)
async def prometheus_metrics():
    """
    Prometheus-formatted metrics endpoint
    """
    usage = system_usage()
    metrics = [
        f"agri_dashboard_cpu_usage_percent {usage['cpu_percent']}",
        f"agri_dashboard_memory_usage_percent {usage['memory_percent']}",
    ]
    return "\n".join(metrics) + "\n"

@router.get("/version")
async def get_version_info():
    """
    Get version and build information
    """

    return {
        "service": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "python_version": platform.python_version(),
    }
