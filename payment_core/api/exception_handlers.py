"""Exception handlers mapping provider failures to client-safe responses"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from payment_core.api.v1.schemas import PaymentErrorResponse
from payment_core.domain.exceptions import PaymentProviderError
from payment_core.domain.payment_errors import map_payment_error


async def payment_provider_error_handler(request: Request, exc: PaymentProviderError) -> JSONResponse:
    """Classify the failure; full detail stays in the internal log under the correlation id"""
    payment_error = map_payment_error(exc, exc.provider)
    body = PaymentErrorResponse(**payment_error.to_response())
    return JSONResponse(status_code=payment_error.status_code, content=body.model_dump())


def setup_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PaymentProviderError, payment_provider_error_handler)
