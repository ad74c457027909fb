"""
Bids Serializers - DRF serializers for bid endpoints.

This module provides serializers for:
- Milestones (validated input rows)
- Bid placement input
- Bid rejection input
- Bid read representation with project and developer summaries
"""

from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from accounts.serializers import DeveloperSummarySerializer
from projects.api.serializers import ProjectSummarySerializer
from projects.models import Timeline

from ..models import Bid

REQUIRED_FIELDS_MESSAGE = _(
    'Please provide all required fields: project_id, amount, timeline, proposal'
)


class MilestoneSerializer(serializers.Serializer):
    """One proposed payment checkpoint."""

    title = serializers.CharField(max_length=200)
    description = serializers.CharField(max_length=1000, required=False, allow_blank=True, default='')
    # Extra precision so the sum check, not rounding, decides borderline totals
    amount = serializers.DecimalField(max_digits=14, decimal_places=4, min_value=0)
    due_date = serializers.DateField()
    completed = serializers.BooleanField(required=False, default=False)


class BidCreateSerializer(serializers.Serializer):
    """
    Input for placing a bid.

    Only shape and enum checks happen here; the business rules (amount > 0,
    project open, not own project, no duplicate, milestone total) belong to
    ``BidWorkflow.place_bid``.
    """

    project_id = serializers.UUIDField(error_messages={'required': REQUIRED_FIELDS_MESSAGE})
    amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        error_messages={'required': REQUIRED_FIELDS_MESSAGE}
    )
    currency = serializers.CharField(max_length=3, required=False, default='USD')
    timeline = serializers.ChoiceField(
        choices=Timeline.choices,
        error_messages={'required': REQUIRED_FIELDS_MESSAGE}
    )
    proposal = serializers.CharField(
        max_length=2000,
        error_messages={
            'required': REQUIRED_FIELDS_MESSAGE,
            'blank': REQUIRED_FIELDS_MESSAGE,
        }
    )
    message = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')
    milestones = MilestoneSerializer(many=True, required=False)
    attachments = serializers.ListField(
        child=serializers.CharField(max_length=500),
        required=False
    )


class BidRejectSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')


class BidSerializer(serializers.ModelSerializer):
    """Bid with embedded project and developer summaries."""

    project = ProjectSummarySerializer(read_only=True)
    developer = DeveloperSummarySerializer(read_only=True)

    class Meta:
        model = Bid
        fields = [
            'uuid',
            'project',
            'developer',
            'amount',
            'currency',
            'timeline',
            'proposal',
            'message',
            'milestones',
            'attachments',
            'status',
            'accepted_at',
            'rejected_at',
            'withdrawn_at',
            'rejection_reason',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields
