"""
Driving Compliance API Serializers.

Provides serialization and validation for the driving time compliance
endpoints: query parameter validation, session output and the
compliance status payload.
"""

from django.conf import settings
from rest_framework import serializers

from common.validators import validate_latitude, validate_longitude
from .models import DrivingSession
from .services.rule_evaluator import DrivingRuleEvaluator


class DrivingSessionSerializer(serializers.ModelSerializer):
    """Serializer for DrivingSession records (read-only)."""

    is_active = serializers.BooleanField(read_only=True)

    class Meta:
        model = DrivingSession
        fields = [
            'id',
            'started_at',
            'ended_at',
            'total_driving_min',
            'total_break_min',
            'distance_km',
            'is_compliant',
            'violations',
            'is_active',
        ]
        read_only_fields = fields


class StatusQuerySerializer(serializers.Serializer):
    """
    Query parameters for the status endpoint.

    The position is optional; without it no parking is suggested.
    """

    lat = serializers.FloatField(
        required=False,
        validators=[validate_latitude],
        help_text="Driver's last known latitude"
    )
    lng = serializers.FloatField(
        required=False,
        validators=[validate_longitude],
        help_text="Driver's last known longitude"
    )

    def validate(self, data):
        """Latitude and longitude must be supplied together."""
        if ('lat' in data) != ('lng' in data):
            raise serializers.ValidationError(
                "Both lat and lng are required to locate parking"
            )
        return data


class HistoryQuerySerializer(serializers.Serializer):
    """Query parameters for the history endpoint."""

    days = serializers.IntegerField(
        min_value=1,
        default=7,
        help_text="Trailing window in days"
    )

    def validate_days(self, value):
        max_days = getattr(settings, "DRIVING_HISTORY_MAX_DAYS", 90)
        if value > max_days:
            raise serializers.ValidationError(f"days cannot exceed {max_days}")
        return value


class DailySummarySerializer(serializers.Serializer):
    """One day of aggregated driving history."""

    date = serializers.DateField()
    total_driving = serializers.IntegerField()
    total_break = serializers.IntegerField()
    total_distance = serializers.FloatField()
    session_count = serializers.IntegerField()


class ComplianceStatusSerializer(serializers.Serializer):
    """
    Serializer for a ComplianceSnapshot.

    Field names match the status payload consumed by driver apps.
    """

    is_driving = serializers.BooleanField()
    session_started_at = serializers.DateTimeField(allow_null=True)
    current_driving_min = serializers.IntegerField(source='continuous_driving_min')
    max_driving_before_break = serializers.SerializerMethodField()
    time_until_break_min = serializers.IntegerField()
    daily_driving_min = serializers.IntegerField()
    max_daily_driving_min = serializers.SerializerMethodField()
    weekly_driving_min = serializers.IntegerField()
    max_weekly_driving_min = serializers.SerializerMethodField()
    biweekly_driving_min = serializers.IntegerField()
    next_required_break_min = serializers.IntegerField()
    next_daily_rest_min = serializers.IntegerField()
    violations = serializers.ListField(child=serializers.CharField())
    nearest_parking = serializers.DictField(allow_null=True)

    def get_max_driving_before_break(self, obj):
        return DrivingRuleEvaluator.MAX_CONTINUOUS_DRIVING_MIN

    def get_max_daily_driving_min(self, obj):
        return DrivingRuleEvaluator.MAX_DAILY_DRIVING_MIN

    def get_max_weekly_driving_min(self, obj):
        return DrivingRuleEvaluator.MAX_WEEKLY_DRIVING_MIN
