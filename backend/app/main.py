"""FastAPI application - entity API."""

from fastapi import FastAPI

from backend.app.api.routes.entities import router as entities_router
from backend.app.api.routes.health import router as health_router
from backend.app.api.routes.metrics import router as metrics_router
from backend.app.config import get_settings

app = FastAPI(title="Entity API", version="0.1.0")

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(entities_router, prefix=get_settings().api_prefix)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Entity API", "version": "0.1.0"}
