"""
Projects Serializers - DRF serializers for project endpoints.

This module provides serializers for:
- Budget (nested ``{"min", "max", "currency"}`` view over the flat columns)
- Project write (create / partial update)
- Project read (list and detail with owner and selected developer)
- Project summary embedded in bid payloads
"""

from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from accounts.serializers import DeveloperSummarySerializer, UserSummarySerializer

from ..models import Project


# ============================================================================
# BUDGET SERIALIZER
# ============================================================================

class BudgetSerializer(serializers.Serializer):
    """
    Budget range mapped onto ``budget_min``/``budget_max``/``budget_currency``.

    Used with ``source='*'`` so validated values land flat on the project.
    """

    min = serializers.DecimalField(
        source='budget_min',
        max_digits=12,
        decimal_places=2,
        min_value=0
    )
    max = serializers.DecimalField(
        source='budget_max',
        max_digits=12,
        decimal_places=2,
        min_value=0
    )
    currency = serializers.CharField(
        source='budget_currency',
        max_length=3,
        default='USD'
    )


# ============================================================================
# PROJECT SERIALIZERS
# ============================================================================

class ProjectSummarySerializer(serializers.ModelSerializer):
    """Compact project representation embedded in bids."""

    budget = BudgetSerializer(source='*', read_only=True)

    class Meta:
        model = Project
        fields = ['uuid', 'title', 'description', 'budget', 'status', 'deadline']
        read_only_fields = fields


class ProjectSerializer(serializers.ModelSerializer):
    """Full serializer for project listings and detail."""

    owner = UserSummarySerializer(read_only=True)
    budget = BudgetSerializer(source='*', read_only=True)
    selected_developer = DeveloperSummarySerializer(read_only=True, allow_null=True)

    class Meta:
        model = Project
        fields = [
            'uuid',
            'title',
            'description',
            'category',
            'skills',
            'budget',
            'timeline',
            'complexity',
            'status',
            'requirements',
            'deliverables',
            'attachments',
            'deadline',
            'owner',
            'selected_developer',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ProjectWriteSerializer(serializers.ModelSerializer):
    """
    Serializer for creating and updating projects.

    Status, owner and selected developer are never writable here; they change
    only through the bid workflow. On partial update the budget range is
    re-validated against the stored values.
    """

    budget = BudgetSerializer(source='*')
    skills = serializers.ListField(
        child=serializers.CharField(max_length=50),
        required=False
    )
    requirements = serializers.ListField(
        child=serializers.CharField(max_length=500),
        required=False
    )
    deliverables = serializers.ListField(
        child=serializers.CharField(max_length=500),
        required=False
    )

    class Meta:
        model = Project
        fields = [
            'title',
            'description',
            'category',
            'skills',
            'budget',
            'timeline',
            'complexity',
            'requirements',
            'deliverables',
            'deadline',
        ]

    def validate_deadline(self, value):
        if value <= timezone.now():
            raise serializers.ValidationError(_('Deadline must be in the future'))
        return value

    def validate(self, data):
        """Cross-field validation."""
        budget_min = data.get('budget_min', getattr(self.instance, 'budget_min', None))
        budget_max = data.get('budget_max', getattr(self.instance, 'budget_max', None))

        if budget_min is not None and budget_max is not None and budget_min > budget_max:
            raise serializers.ValidationError({
                'budget': _('Minimum budget cannot be greater than maximum budget')
            })

        return data

    def to_representation(self, instance):
        return ProjectSerializer(instance, context=self.context).data
