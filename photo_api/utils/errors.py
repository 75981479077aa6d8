import logging
from typing import List, Optional, Union

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from photo_api.utils.validation import RULE_VIOLATIONS


logger = logging.getLogger(__name__)

Message = Union[str, List[str]]


class ApiError(Exception):
    """Error that is reported to the client as ``{"message": ...}``."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "internal server error"

    def __init__(self, message: Optional[Message] = None):
        self.message = message if message is not None else self.default_message
        super().__init__(self.message)


class BadRequest(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "bad request"


class Unauthorized(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "unauthorized"


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "data not found"


class Conflict(ApiError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "conflict"


def _validation_messages(exc: RequestValidationError) -> List[str]:
    messages = []
    for err in exc.errors():
        if err["type"] == RULE_VIOLATIONS:
            messages.extend(err["ctx"]["messages"])
            continue
        if tuple(err.get("loc", ())) == ("body",):
            messages.append("Request body must be a JSON object")
            continue
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        field = ".".join(loc)
        messages.append(f"{field}: {err['msg']}" if field else err["msg"])
    return messages


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    logger.info("%s %s -> %s %s", request.method,
                request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = _validation_messages(exc)
    logger.info("%s %s -> 400 %s", request.method, request.url.path, messages)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": messages})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
