"""
Ethiopia Agricultural Data Dashboard - Main Application
Boundaries, agricultural statistics and choropleth rendering over PostgreSQL/PostGIS
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
import os
from datetime import datetime

# API modules
from .api.boundaries import router as boundaries_router
from .api.metrics import router as metrics_router
from .api.map import router as map_router
from .api.health import router as health_router

# Configuration
from .config import settings
from .database import test_connection

# Initialize FastAPI app
app = FastAPI(
    title="Ethiopia Agricultural Data Dashboard API",
    description="Administrative boundaries, agricultural statistics and choropleth maps",
    version=settings.VERSION,
    docs_url="/api/docs" if settings.ENVIRONMENT == "development" else None,
    redoc_url="/api/redoc" if settings.ENVIRONMENT == "development" else None,
)

# CORS middleware for frontend integration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(boundaries_router, prefix=settings.API_V1_STR)
app.include_router(metrics_router, prefix=settings.API_V1_STR)
app.include_router(map_router, prefix=settings.API_V1_STR)
app.include_router(health_router, prefix="/api")

# =====================================
# ROOT ENDPOINTS
# =====================================

@app.get("/")
async def root():
    """API root endpoint"""
    return {
        "service": settings.PROJECT_NAME,
        "status": "online",
        "version": settings.VERSION,
        "docs": "/api/docs",
        "health": "/api/health"
    }

# =====================================
# STARTUP/SHUTDOWN EVENTS
# =====================================

@app.on_event("startup")
async def startup_event():
    """Check services on startup"""

    logging.info("🚀 Starting Agricultural Data Dashboard API")

    if test_connection():
        logging.info("✅ Database connection successful")
    else:
        logging.error("❌ Database connection failed")

    logging.info("🎯 Agricultural Data Dashboard API ready for requests")

@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    logging.info("👋 Shutting down Agricultural Data Dashboard API")

# =====================================
# GLOBAL EXCEPTION HANDLERS
# =====================================

@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler for production"""

    logging.error(f"Global exception: {exc}", exc_info=True)

    if settings.ENVIRONMENT == "development":
        # In development, show full error details
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "Internal server error",
                "detail": str(exc),
                "type": type(exc).__name__
            }
        )
    else:
        # In production, hide error details
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "Internal server error",
                "message": "An unexpected error occurred. Please try again later."
            }
        )

# =====================================
# MIDDLEWARE
# =====================================

@app.middleware("http")
async def logging_middleware(request, call_next):
    """Log all requests for monitoring"""

    start_time = datetime.utcnow()

    response = await call_next(request)

    process_time = (datetime.utcnow() - start_time).total_seconds()

    logging.info(
        f"{request.method} {request.url.path} - "
        f"Status: {response.status_code} - "
        f"Time: {process_time:.3f}s"
    )

    return response

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "agri_dashboard.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        reload=settings.ENVIRONMENT == "development"
    )
