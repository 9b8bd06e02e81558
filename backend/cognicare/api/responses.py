"""Response helper — ServiceResult → JSONResponse."""

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from cognicare.core.service_result import ServiceResult


def send(result: ServiceResult) -> JSONResponse:
    """Rows carry UUID, datetime and Decimal values; jsonable_encoder serializes them."""
    return JSONResponse(
        status_code=result.status_code, content=jsonable_encoder(result.to_body()),
    )
