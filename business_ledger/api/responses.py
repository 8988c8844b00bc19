"""Standard API response envelope"""

from typing import Any
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from business_ledger.api.routes.schemas import Envelope
from business_ledger.utils.date_utils import now_iso


def send_response(status_code: int, success: bool, data: Any = None, message: str = "") -> JSONResponse:
    """Wrap data as {success, data, message, timestamp}"""
    body = Envelope(success=success, data=jsonable_encoder(data), message=message, timestamp=now_iso())
    return JSONResponse(status_code=status_code, content=body.model_dump())
