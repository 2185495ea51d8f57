"""
Procrastinot Dashboard FastAPI Backend

Entry point for the API server that exposes the dashboard engine to the
React frontend.

Architecture:
- FastAPI handles HTTP routing and request/response validation
- Pydantic schemas ensure type safety
- The dashboard package computes every derived number
- Raw records come from the Procrastinot REST backend

Run with:
    uvicorn backend.main:app --reload --port 8000

Or:
    python -m backend.main
"""

import logging
import sys
from pathlib import Path
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Add project root to path for imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from backend.routers import dashboard_router, pomodoro_router
from backend.dependencies import get_config
from procrastinot import __version__

logger = logging.getLogger("backend")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Logs where records will be fetched from on startup.
    """
    config = get_config()
    logger.info("Config loaded from: %s", config.config_dir)
    logger.info("Fetching records from: %s", config.get("api_base_url"))

    yield

    logger.info("Shutting down...")


# Create FastAPI app
app = FastAPI(
    title="Procrastinot Dashboard API",
    description="""
    Dashboard statistics for the Procrastinot productivity app.

    ## Features

    - **Dashboard**: Task and focus stats, streak, level, productivity score
    - **Activity**: Recent completed tasks, focus sessions and new tasks
    - **Pomodoro**: Focus statistics for today, this week or this month
    """,
    version=__version__,
    lifespan=lifespan,
)

# Configure CORS for frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",  # Vite dev server
        "http://localhost:5174",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(dashboard_router)
app.include_router(pomodoro_router)


@app.get("/")
async def root():
    """API root - returns basic info and available endpoints."""
    return {
        "name": "Procrastinot Dashboard API",
        "version": __version__,
        "docs": "/docs",
        "endpoints": {
            "dashboard": "/dashboard/{user_id}",
            "stats": "/dashboard/{user_id}/stats",
            "quick_stats": "/dashboard/{user_id}/quick-stats",
            "activity": "/dashboard/{user_id}/activity",
            "compute": "/dashboard/compute",
            "pomodoro": "/pomodoro/{user_id}/stats",
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    config = get_config()
    return {"status": "healthy", "upstream": config.get("api_base_url")}


# Allow running directly with: python -m backend.main
if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=logging.INFO)
    uvicorn.run(
        "backend.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
