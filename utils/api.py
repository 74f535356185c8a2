import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import status
from rest_framework.response import Response

logger = logging.getLogger(__name__)


def error_response(message, status_code=status.HTTP_400_BAD_REQUEST, **extra):
    body = {"message": message}
    body.update(extra)
    return Response(body, status=status_code)


def validation_message(exc: DjangoValidationError) -> str:
    if getattr(exc, "messages", None):
        return exc.messages[0]
    return str(exc)


def first_error(errors) -> str:
    """Flatten DRF serializer errors to the first human readable message."""
    if isinstance(errors, dict):
        for field, value in errors.items():
            message = first_error(value)
            if field == "non_field_errors":
                return message
            return f"{field}: {message}"
    if isinstance(errors, (list, tuple)) and errors:
        return first_error(errors[0])
    return str(errors)


def internal_error(request, log_message: str):
    logger.exception("%s path=%s", log_message, request.path)
    return error_response("Internal Server Error", status.HTTP_500_INTERNAL_SERVER_ERROR)
