# guesty_report/main.py

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from guesty_report.config import ALLOWED_ORIGINS, HOST, PORT, REPORT_MODE
from guesty_report.logging_config import setup_logging
from guesty_report.middleware import RequestIDMiddleware
from guesty_report.routes.health import router as health_router
from guesty_report.routes.listings import router as listings_router
from guesty_report.routes.metrics import router as metrics_router
from guesty_report.routes.rapport import router as rapport_router
from guesty_report.routes.reservations import router as reservations_router

# Initialize structured logging
setup_logging()
logger = structlog.get_logger(__name__)

app = FastAPI(
    title="Guesty Report API",
    description="Listing, reservation and occupancy report facade over the Guesty Open API",
    version="1.0.0",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS if "*" not in ALLOWED_ORIGINS else ["*"],
    allow_credentials="*" not in ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestIDMiddleware)

# Register routers
app.include_router(health_router, tags=["Health"])
app.include_router(metrics_router, tags=["Metrics"])
app.include_router(listings_router, prefix="/api", tags=["Listings"])
app.include_router(reservations_router, prefix="/api", tags=["Reservations"])
app.include_router(rapport_router, prefix="/api", tags=["Rapport"])


def run() -> None:
    """Start the API with uvicorn on HOST:PORT (default port 3000)."""
    logger.info("server_starting", host=HOST, port=PORT, report_mode=REPORT_MODE)
    uvicorn.run(app, host=HOST, port=PORT, log_config=None)


if __name__ == "__main__":
    run()
