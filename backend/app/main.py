"""FastAPI application."""

from fastapi import FastAPI

from backend.app.api.routes.balance import router as balance_router
from backend.app.api.routes.health import router as health_router
from backend.app.api.routes.itineraries import router as itineraries_router
from backend.app.api.routes.metrics import router as metrics_router

app = FastAPI(title="Itinerary Core API", version="0.1.0")

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(balance_router, tags=["planning"])
app.include_router(itineraries_router, tags=["itineraries"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Itinerary Core API", "version": "0.1.0"}
