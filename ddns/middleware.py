from rest_framework import status
from rest_framework.exceptions import APIException, PermissionDenied, ValidationError
from rest_framework.views import exception_handler

from ddns import exceptions


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Host already registered'
    default_code = 'already_registered'


def custom_exception_handler(excp, context):
    # Translate engine errors into their REST framework counterpart, then let
    # REST framework's default handler build the response.
    if isinstance(excp, exceptions.InvalidInput):
        excp = ValidationError({'detail': [excp.detail]})
    elif isinstance(excp, exceptions.AlreadyRegistered):
        excp = Conflict(excp.detail)
    elif isinstance(excp, exceptions.UnknownToken):
        excp = PermissionDenied(excp.detail)
    elif isinstance(excp, exceptions.InternalError):
        excp = APIException(excp.detail)
    return exception_handler(excp, context)
