"""
Infrastructure views and the mapping from service failures to HTTP responses.
"""

import logging

from django.db import DatabaseError, connection
from django.http import JsonResponse

logger = logging.getLogger(__name__)


def health_check(request):
    """
    Liveness check for load balancers.

    200 with {"status": "healthy", "database": "connected"} when a trivial
    query succeeds, 503 with status "unhealthy" otherwise.
    """
    health_status = {
        "status": "healthy",
        "database": "unknown",
    }
    is_healthy = True

    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        health_status["database"] = "connected"
    except DatabaseError:
        logger.error("Health check could not reach the database", exc_info=True)
        health_status["database"] = "disconnected"
        health_status["status"] = "unhealthy"
        is_healthy = False

    status_code = 200 if is_healthy else 503

    return JsonResponse(health_status, status=status_code)


# HTTP status for each error kind raised by the service layer
ERROR_KIND_STATUS = {
    "ValidationError": 422,
    "PolicyError": 400,
    "NotFoundError": 404,
    "ConflictError": 409,
    "InvalidStateError": 409,
    "ConfigurationError": 503,
    "ExternalServiceError": 502,
    "GatewayError": 502,
    "StorageError": 503,
}


def error_response(result):
    """
    Build a DRF Response for a failed ServiceResult.

    The status code is derived from result.error_kind; unknown kinds map to 400.
    """
    from rest_framework.response import Response

    body = {"error": result.error, "error_code": result.error_code}
    if result.error_kind:
        body["error_kind"] = result.error_kind
    if result.details:
        body["details"] = result.details
    if result.errors:
        body["errors"] = result.errors
    return Response(body, status=ERROR_KIND_STATUS.get(result.error_kind, 400))
