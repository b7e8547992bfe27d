from django.conf import settings
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, authentication_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from onepoint.health import database_status


@api_view(["GET"])
@authentication_classes([])
@permission_classes([AllowAny])
def health(request):
    db = database_status()
    return Response(
        {
            "status": "OK" if db.connected else "DEGRADED",
            "message": f"{settings.BUSINESS_NAME} API is running",
            "timestamp": timezone.now().isoformat(),
            "database": db.label,
            "environment": settings.APP_ENVIRONMENT,
        },
        status=status.HTTP_200_OK if db.connected else status.HTTP_503_SERVICE_UNAVAILABLE,
    )


@api_view(["GET"])
@authentication_classes([])
@permission_classes([AllowAny])
def api_root(request):
    return Response({
        "success": True,
        "message": f"Welcome to {settings.BUSINESS_NAME} API",
        "endpoints": {
            "health": "/api/health/",
            "auth": "/api/auth/",
            "services": "/api/services/",
            "bookings": "/api/bookings/",
            "payments": "/api/payments/",
            "admin": "/api/admin/",
        },
    })


@api_view(["GET", "POST", "PUT", "PATCH", "DELETE"])
@authentication_classes([])
@permission_classes([AllowAny])
def api_not_found(request, *args, **kwargs):
    return Response(
        {
            "success": False,
            "message": "API endpoint not found",
            "endpoint": request.path,
        },
        status=status.HTTP_404_NOT_FOUND,
    )
