import logging
import uuid

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from mgqs.flows.errors import (
    FlowError,
    GenerationFailed,
    InvalidInput,
    MalformedOutput,
    UpstreamUnavailable,
    describe_error_list,
)

logger = logging.getLogger(__name__)

FLOW_ERROR_STATUS: dict[type[FlowError], int] = {
    InvalidInput: 422,
    GenerationFailed: 422,
    MalformedOutput: 502,
    UpstreamUnavailable: 503,
}


def get_request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


def status_for(exc: FlowError) -> int:
    for error_type, status_code in FLOW_ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return status_code
    return 500


def error_response(
    request: Request,
    *,
    code: str,
    message: str,
    status_code: int,
    details=None,
    retryable: bool = False,
) -> JSONResponse:
    payload = {
        "success": False,
        "error": {
            "code": code,
            "message": message,
            "retryable": retryable,
            "request_id": get_request_id(request),
            "details": details,
        },
    }
    headers = {"x-request-id": get_request_id(request)}
    return JSONResponse(status_code=status_code, content=payload, headers=headers)


async def flow_exception_handler(request: Request, exc: FlowError):
    status_code = status_for(exc)
    if status_code >= 500:
        logger.warning("Flow failed | request_id=%s | %s: %s", get_request_id(request), exc.code, exc.message)
    return error_response(
        request,
        code=exc.code,
        message=exc.message,
        status_code=status_code,
        details=[issue.as_dict() for issue in exc.details] or None,
        retryable=exc.retryable,
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    return error_response(
        request,
        code="http_error",
        message=str(exc.detail),
        status_code=exc.status_code,
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return error_response(
        request,
        code=InvalidInput.code,
        message="Please check your input and try again.",
        status_code=422,
        details=[issue.as_dict() for issue in describe_error_list(exc.errors())],
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception | request_id=%s", get_request_id(request), exc_info=exc)
    return error_response(
        request,
        code="internal_error",
        message="Internal server error",
        status_code=500,
    )


async def request_id_middleware(request: Request, call_next):
    incoming = request.headers.get("x-request-id")
    request.state.request_id = incoming or str(uuid.uuid4())
    response = await call_next(request)
    response.headers["x-request-id"] = request.state.request_id
    return response
