"""FastAPI application."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from snmp_inventory.api.routes import health, scans


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="SNMP Inventory",
        description="On-demand SNMP inventory of network device fleets",
        version="0.1.0",
    )
    app.state.latest_scan = None

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(health.router, tags=["Health"])
    app.include_router(scans.router, prefix="/api/v1", tags=["Scans"])

    return app
