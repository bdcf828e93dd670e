# exceptions.py
from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import status
from django.core.exceptions import ValidationError, ObjectDoesNotExist
from django.db import IntegrityError
import logging
from django.conf import settings

logger = logging.getLogger(__name__)


def _envelope(message, details, status_code):
    return {
        'error': True,
        'message': message,
        'details': details,
        'status_code': status_code
    }


def custom_exception_handler(exc, context):
    """
    Custom exception handler for the menu API.

    Every error leaves as {error, message, details, status_code}. Missing
    and not-owned resources share the same 404 body.
    """
    # Call REST framework's default exception handler first
    response = exception_handler(exc, context)

    if response is not None:
        custom_response_data = _envelope('An error occurred', response.data, response.status_code)

        if response.status_code == 400:
            custom_response_data['message'] = 'Validation error'
        elif response.status_code == 401:
            custom_response_data['message'] = 'Authentication required'
        elif response.status_code == 403:
            custom_response_data['message'] = 'Permission denied'
        elif response.status_code == 404:
            custom_response_data['message'] = 'Resource not found'
        elif response.status_code == 413:
            custom_response_data['message'] = 'Payload too large'

        response.data = custom_response_data

    # Storage lookups raise Model.DoesNotExist for absent or foreign rows
    elif isinstance(exc, ObjectDoesNotExist):
        response = Response(
            _envelope('Resource not found', {'detail': 'Not found.'}, 404),
            status=status.HTTP_404_NOT_FOUND
        )

    # Handle Django ValidationError
    elif isinstance(exc, ValidationError):
        logger.warning(f"Validation Error: {exc}")
        response = Response(
            _envelope('Validation error', {'non_field_errors': exc.messages}, 400),
            status=status.HTTP_400_BAD_REQUEST
        )

    # Handle Django IntegrityError
    elif isinstance(exc, IntegrityError):
        logger.error(f"Integrity Error: {exc}")
        response = Response(
            _envelope('Database integrity error',
                      {'error': 'This operation violates database constraints'}, 400),
            status=status.HTTP_400_BAD_REQUEST
        )

    # Handle unexpected errors
    else:
        view = context.get('view')
        logger.exception(f"Unexpected Error in {view.__class__.__name__ if view else 'unknown view'}: {exc}")
        response = Response(
            _envelope('An unexpected error occurred',
                      {'error': str(exc)} if settings.DEBUG else {}, 500),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    return response
