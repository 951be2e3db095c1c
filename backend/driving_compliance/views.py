"""
Driving Compliance API Views.

Provides REST API endpoints for driving time status, session start/stop
and driving history. The authenticated user is the driver; business logic
lives in the compliance engine.
"""

import logging
from django.utils import timezone
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .exceptions import CollaboratorUnavailable, SessionConflictError, SessionNotFoundError
from .serializers import (
    ComplianceStatusSerializer,
    DailySummarySerializer,
    DrivingSessionSerializer,
    HistoryQuerySerializer,
    StatusQuerySerializer,
)
from .services.compliance_engine import ComplianceEngine

logger = logging.getLogger(__name__)


class DrivingComplianceViewSet(viewsets.ViewSet):
    """
    ViewSet for driving time compliance.

    Status and history never write; start and stop change the
    driver's active session.
    """

    permission_classes = [IsAuthenticated]

    def get_engine(self):
        return ComplianceEngine()

    @action(detail=False, methods=['get'])
    def current_status(self, request):
        """
        Get current driving time status.

        Query Parameters:
            lat (float, optional): Driver's latitude for parking suggestions
            lng (float, optional): Driver's longitude for parking suggestions
        """
        query = StatusQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response(query.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            snapshot = self.get_engine().status(
                request.user,
                now=timezone.now(),
                latitude=query.validated_data.get('lat'),
                longitude=query.validated_data.get('lng'),
            )
        except CollaboratorUnavailable as e:
            logger.error(f"Driving status unavailable for driver {request.user.pk}: {str(e)}")
            return Response(
                {'error': 'Driving status temporarily unavailable'},
                status=status.HTTP_503_SERVICE_UNAVAILABLE
            )

        return Response(ComplianceStatusSerializer(snapshot).data)

    @action(detail=False, methods=['post'])
    def start(self, request):
        """Start a driving session for the authenticated driver."""
        try:
            session = self.get_engine().start(request.user, now=timezone.now())
        except SessionConflictError as e:
            return Response(
                {'error': str(e), 'session_id': str(e.session_id) if e.session_id else None},
                status=status.HTTP_409_CONFLICT
            )
        except CollaboratorUnavailable as e:
            logger.error(f"Starting session failed for driver {request.user.pk}: {str(e)}")
            return Response(
                {'error': 'Failed to start driving session'},
                status=status.HTTP_503_SERVICE_UNAVAILABLE
            )

        return Response(
            {'session': DrivingSessionSerializer(session).data},
            status=status.HTTP_201_CREATED
        )

    @action(detail=False, methods=['post'])
    def stop(self, request):
        """Stop the authenticated driver's active driving session."""
        try:
            session = self.get_engine().stop(request.user, now=timezone.now())
        except SessionNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except CollaboratorUnavailable as e:
            logger.error(f"Stopping session failed for driver {request.user.pk}: {str(e)}")
            return Response(
                {'error': 'Failed to stop driving session'},
                status=status.HTTP_503_SERVICE_UNAVAILABLE
            )

        return Response({'session': DrivingSessionSerializer(session).data})

    @action(detail=False, methods=['get'])
    def history(self, request):
        """
        Get driving sessions and daily totals.

        Query Parameters:
            days (int, optional): Trailing window in days (default 7)
        """
        query = HistoryQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response(query.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            result = self.get_engine().history(
                request.user,
                now=timezone.now(),
                window_days=query.validated_data['days'],
            )
        except CollaboratorUnavailable as e:
            logger.error(f"Driving history unavailable for driver {request.user.pk}: {str(e)}")
            return Response(
                {'error': 'Driving history temporarily unavailable'},
                status=status.HTTP_503_SERVICE_UNAVAILABLE
            )

        return Response({
            'sessions': DrivingSessionSerializer(result['sessions'], many=True).data,
            'daily_summary': DailySummarySerializer(result['daily_summary'], many=True).data,
        })
