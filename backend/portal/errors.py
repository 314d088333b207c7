import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error"


def _first_error_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    message = str(first.get('msg', 'Invalid request'))
    # pydantic prefixes messages raised from validators
    if message.startswith('Value error, '):
        message = message[len('Value error, '):]
    location = [str(part) for part in first.get('loc', ()) if part not in ('body', 'query', 'path')]
    if first.get('type') == 'missing' and location:
        return f"{location[-1]} is required"
    return message


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies and parameters as 400 with a single message."""
    message = _first_error_message(exc)
    logger.info(f"Rejected {request.method} {request.url.path}: {message}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": message})
