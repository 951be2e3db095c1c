"""
Driving Session model for driving time compliance.

Contains the DrivingSession model that records one continuous
drive-until-rest interval for a driver.
"""

import uuid
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import F, Q


class DrivingSession(models.Model):
    """
    One continuous driving interval for one driver.

    A session is active while ``ended_at`` is null. It is written once at
    start and updated once at stop; after that it is never modified.

    The database guarantees at most one active session per driver through
    a partial unique constraint, so concurrent start requests for the same
    driver cannot both succeed even across service instances.

    Attributes:
        id: UUID primary key
        driver: The user who drives
        started_at: When driving started
        ended_at: When driving stopped (null while active)
        total_driving_min: Driving minutes, set at stop
        total_break_min: Break minutes recorded for the session
        distance_km: Distance covered during the session
        is_compliant: Whether the session ended without violations
        violations: Violation messages recorded at stop
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the driving session"
    )

    driver = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='driving_sessions',
        help_text="The driver this session belongs to"
    )

    started_at = models.DateTimeField(
        help_text="When the driver started driving"
    )

    ended_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the driver stopped driving (empty while active)"
    )

    total_driving_min = models.PositiveIntegerField(
        null=True,
        blank=True,
        help_text="Driving minutes in this session, rounded up at stop"
    )

    # Optional enrichment, not used by the rule evaluation
    total_break_min = models.PositiveIntegerField(
        null=True,
        blank=True,
        help_text="Break minutes taken during the session"
    )

    distance_km = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)],
        help_text="Distance covered in kilometres"
    )

    is_compliant = models.BooleanField(
        null=True,
        blank=True,
        help_text="Whether the session ended without violations"
    )

    violations = models.JSONField(
        default=list,
        blank=True,
        help_text="Violation messages recorded when the session stopped"
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'driving_sessions'
        ordering = ['-started_at']
        verbose_name = 'Driving Session'
        verbose_name_plural = 'Driving Sessions'
        indexes = [
            models.Index(fields=['driver', 'started_at'], name='driving_ses_driver__3b1f0e_idx'),
            models.Index(fields=['ended_at'], name='driving_ses_ended_a_7c2d41_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['driver'],
                condition=Q(ended_at__isnull=True),
                name='one_active_session_per_driver',
            ),
            models.CheckConstraint(
                condition=Q(ended_at__isnull=True) | Q(ended_at__gt=F('started_at')),
                name='session_ends_after_start',
            ),
        ]

    def __str__(self):
        """Return string representation of the driving session."""
        state = "active" if self.is_active else f"{self.total_driving_min} min"
        return f"Driving session for {self.driver} from {self.started_at:%Y-%m-%d %H:%M} ({state})"

    @property
    def is_active(self):
        """Check if the driver is still driving in this session."""
        return self.ended_at is None
