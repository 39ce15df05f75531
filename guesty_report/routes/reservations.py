import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from guesty_report.dependencies import get_guesty_client
from guesty_report.network.client import GuestyClient
from guesty_report.normalizers.reservations import normalize_reservations
from guesty_report.routes._responses import error_response, success_response

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/reservations")
def list_reservations(client: GuestyClient = Depends(get_guesty_client)) -> JSONResponse:
    """
    List up to 100 reservations, latest check-in first.

    Args:
        client: Guesty API client

    Returns:
        JSONResponse: ``{success, count, reservations}``, or a 500 failure envelope
    """
    try:
        reservations = normalize_reservations(client.fetch_reservations())
        logger.info("reservations_served", count=len(reservations))
        return success_response(count=len(reservations), reservations=reservations)
    except Exception as e:
        return error_response(e, route="reservations")
