from rest_framework.response import Response
from rest_framework import status as http_status


def success_response(message=None, data=None, status_code=http_status.HTTP_200_OK, **extra):
    payload = {"success": True}
    if message is not None:
        payload["message"] = message
    payload.update(extra)
    if data is not None:
        payload["data"] = data
    return Response(payload, status=status_code)


def error_response(message, errors=None, status_code=http_status.HTTP_400_BAD_REQUEST):
    payload = {"success": False, "message": message}
    if errors is not None:
        payload["errors"] = errors
    return Response(payload, status=status_code)
