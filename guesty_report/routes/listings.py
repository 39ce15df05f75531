import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from guesty_report.dependencies import get_guesty_client
from guesty_report.network.client import GuestyClient
from guesty_report.normalizers.listings import normalize_listings
from guesty_report.routes._responses import error_response, success_response

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/listings")
def list_listings(client: GuestyClient = Depends(get_guesty_client)) -> JSONResponse:
    """
    List Guesty listings as summaries.

    Args:
        client: Guesty API client

    Returns:
        JSONResponse: ``{success, count, listings}``, or a 500 failure envelope
    """
    try:
        listings = normalize_listings(client.fetch_listings())
        logger.info("listings_served", count=len(listings))
        return success_response(count=len(listings), listings=listings)
    except Exception as e:
        return error_response(e, route="listings")
