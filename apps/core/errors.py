"""
Service error taxonomy and the Ninja exception handlers that render it.

Each component raises the error it can classify; anything else reaches
the catch-all handler and is reported as a generic 500.
"""
import logging

from django.http import HttpRequest
from ninja import NinjaAPI

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base class for errors that map onto a client-facing status code."""
    status_code = 500
    body_key = 'error'
    default_message = 'Internal server error'

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthMissing(ServiceError):
    status_code = 401
    body_key = 'message'
    default_message = 'No token provided'


class AuthInvalid(ServiceError):
    status_code = 401
    body_key = 'message'
    default_message = 'Failed to authenticate token'


class ValidationFailed(ServiceError):
    status_code = 400
    default_message = 'Invalid request'


class NotFound(ServiceError):
    status_code = 404
    default_message = 'Not found'


def register_exception_handlers(api: NinjaAPI) -> None:
    """
    Attach JSON renderers for ServiceError and unexpected exceptions.

    Ninja's own handlers (HttpError, request validation) stay in place
    since handler lookup follows the exception's MRO.
    """

    @api.exception_handler(ServiceError)
    def on_service_error(request: HttpRequest, exc: ServiceError):
        return api.create_response(
            request,
            {exc.body_key: exc.message},
            status=exc.status_code,
        )

    @api.exception_handler(Exception)
    def on_unexpected_error(request: HttpRequest, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.path}: {exc}")
        return api.create_response(
            request,
            {'error': ServiceError.default_message},
            status=500,
        )
