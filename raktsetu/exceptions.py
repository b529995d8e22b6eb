import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class RaktSetuError(Exception):
    """Base class for domain errors that are safe to show to API callers."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = 'Request could not be processed'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(RaktSetuError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = 'Not found'


def api_exception_handler(exc, context):
    """Wrap DRF's handler so every error uses the {success, message} envelope."""
    response = exception_handler(exc, context)
    if response is None:
        logger.exception('Unhandled error in %s', context.get('view').__class__.__name__)
        return Response(
            {'success': False, 'message': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    detail = response.data
    if isinstance(detail, dict) and 'detail' in detail:
        payload = {'success': False, 'message': str(detail['detail'])}
    else:
        payload = {'success': False, 'message': 'Invalid data provided', 'errors': detail}
    response.data = payload
    return response
