"""
Parking API Views.

Provides the nearby truck parking lookup used by driver apps.
"""

import logging
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from driving_compliance.exceptions import CollaboratorUnavailable
from .serializers import NearbyParkingQuerySerializer
from .services import ParkingLocatorService

logger = logging.getLogger(__name__)


class ParkingViewSet(viewsets.ViewSet):
    """ViewSet for truck parking lookups."""

    permission_classes = [AllowAny]

    @action(detail=False, methods=['get'])
    def nearby(self, request):
        """
        Find truck parking near a point.

        Query Parameters:
            lat (float): Latitude
            lng (float): Longitude
            radius_km (float, optional): Search radius (default 50)
        """
        query = NearbyParkingQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response(query.errors, status=status.HTTP_400_BAD_REQUEST)

        data = query.validated_data
        try:
            parkings = ParkingLocatorService().find_parking_nearby(
                data['lat'], data['lng'], radius_km=data.get('radius_km')
            )
        except CollaboratorUnavailable as e:
            logger.error(f"Nearby parking lookup failed: {str(e)}")
            return Response(
                {'error': 'Parking lookup temporarily unavailable'},
                status=status.HTTP_503_SERVICE_UNAVAILABLE
            )

        return Response({'parkings': parkings})
