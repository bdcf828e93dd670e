from rest_framework import generics, status, permissions
from rest_framework.decorators import api_view, permission_classes, authentication_classes
from rest_framework.response import Response
from django.db import connection
from django.utils import timezone
from drf_spectacular.utils import extend_schema

from .serializers import UserSerializer
import logging

logger = logging.getLogger(__name__)


class CurrentUserView(generics.RetrieveAPIView):
    """
    Profile of the user behind the bearer token. The user row is created or
    refreshed from the token claims during authentication.
    """
    serializer_class = UserSerializer
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(summary="Get Current User", responses={200: UserSerializer})
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)

    def get_object(self):
        return self.request.user


# =============== SYSTEM HEALTH ===============

@extend_schema(
    summary="System Health Check",
    description="Check system health and database connectivity",
    responses={
        200: {
            'type': 'object',
            'properties': {
                'status': {'type': 'string'},
                'timestamp': {'type': 'string'},
                'database': {'type': 'string'},
                'version': {'type': 'string'},
            }
        }
    }
)
@api_view(['GET'])
@authentication_classes([])
@permission_classes([permissions.AllowAny])
def health_check(request):
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")

        return Response({
            'status': 'healthy',
            'timestamp': timezone.now().isoformat(),
            'database': 'connected',
            'version': '1.0.0'
        })
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return Response({
            'status': 'unhealthy',
            'timestamp': timezone.now().isoformat(),
            'database': 'disconnected',
            'error': str(e)
        }, status=status.HTTP_503_SERVICE_UNAVAILABLE)
