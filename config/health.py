import logging

from django.db import DatabaseError, connection
from django.utils import timezone
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

logger = logging.getLogger("storefront.api")


@extend_schema(tags=["Health Endpoint"], summary="Health check")
@api_view(["GET"])
@permission_classes([AllowAny])
@throttle_classes([])
def health(request):
    return Response({"ok": True, "time": timezone.now().isoformat()})


@extend_schema(tags=["Health Endpoint"], summary="Database connectivity check")
@api_view(["GET"])
@permission_classes([AllowAny])
@throttle_classes([])
def db_ping(request):
    """Run `SELECT 1` on the default database."""
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            row = cursor.fetchone()
    except DatabaseError:
        logger.exception("health.db_down", extra={"event": "health.db_down"})
        return Response({"db": "down"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return Response({"db": "up", "result": {"ok": row[0]}})
