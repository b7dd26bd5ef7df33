"""Exception handlers translating failures into ``{"message": ...}`` responses."""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.domain import logger
from storefront.exceptions import MissingProductError, PaymentGatewayError, PaymentNotConfiguredError


def first_message(messages) -> str:
    """The first human readable message out of a Protean error dict."""
    if isinstance(messages, dict):
        for errors in messages.values():
            if isinstance(errors, list | tuple) and errors:
                return str(errors[0])
            if errors:
                return str(errors)
    return str(messages) if messages else "Invalid request"


async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info("request_rejected", errors=exc.messages)
    return JSONResponse(
        status_code=400,
        content={"message": first_message(exc.messages), "errors": jsonable_encoder(exc.messages)},
    )


async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = jsonable_encoder(exc.errors())
    message = "Invalid request"
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
        message = f"{location}: {errors[0].get('msg')}" if location else errors[0].get("msg", message)
    logger.info("request_rejected", errors=errors)
    return JSONResponse(status_code=400, content={"message": message, "errors": errors})


async def _not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    message = str(exc.args[0]) if exc.args else "Not found"
    return JSONResponse(status_code=404, content={"message": message})


async def _http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def _payment_not_configured(request: Request, exc: PaymentNotConfiguredError) -> JSONResponse:
    logger.warning("payment_not_configured")
    return JSONResponse(status_code=400, content={"message": str(exc)})


async def _payment_gateway_error(request: Request, exc: PaymentGatewayError) -> JSONResponse:
    return JSONResponse(status_code=500, content={"message": str(exc)})


async def _missing_product(request: Request, exc: MissingProductError) -> JSONResponse:
    logger.error("data_integrity_error", product_id=exc.product_id, line_kind=exc.line_kind)
    return JSONResponse(status_code=500, content={"message": str(exc)})


async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", error=str(exc))
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(ObjectNotFoundError, _not_found)
    app.add_exception_handler(StarletteHTTPException, _http_exception)
    app.add_exception_handler(PaymentNotConfiguredError, _payment_not_configured)
    app.add_exception_handler(PaymentGatewayError, _payment_gateway_error)
    app.add_exception_handler(MissingProductError, _missing_product)
    app.add_exception_handler(Exception, _unhandled)
