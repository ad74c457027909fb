"""
Bids Models - Developer bids on client projects.

This module defines:
- Bid: A developer's offer (amount, timeline, proposal, optional milestones)

Status transitions (all performed by ``bids.workflow.BidWorkflow``):
    pending -> accepted   (project owner accepts; siblings are rejected)
    pending -> rejected   (project owner rejects, or another bid was accepted)
    pending -> withdrawn  (bidding developer withdraws)

Bids are never physically deleted. Neither the project nor the developer
profile behind a bid can be deleted (``on_delete=PROTECT``).
"""

import uuid

from django.core.serializers.json import DjangoJSONEncoder
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.models import TimestampedModel
from projects.models import Project, Timeline


class Bid(TimestampedModel):
    """
    Developer's bid on a project.

    At most one bid per (project, developer).
    """

    class Status(models.TextChoices):
        PENDING = 'pending', _('Pending')
        ACCEPTED = 'accepted', _('Accepted')
        REJECTED = 'rejected', _('Rejected')
        WITHDRAWN = 'withdrawn', _('Withdrawn')

    uuid = models.UUIDField(default=uuid.uuid4, editable=False, unique=True)

    # Relationships
    project = models.ForeignKey(
        Project,
        on_delete=models.PROTECT,
        related_name='bids'
    )
    developer = models.ForeignKey(
        'accounts.DeveloperProfile',
        on_delete=models.PROTECT,
        related_name='bids'
    )

    # Pricing
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(0)]
    )
    currency = models.CharField(max_length=3, default='USD')

    # Offer
    timeline = models.CharField(max_length=20, choices=Timeline.choices)
    proposal = models.TextField(
        max_length=2000,
        help_text=_('How the developer plans to deliver the project')
    )
    message = models.TextField(max_length=500, blank=True, default='')

    milestones = models.JSONField(
        default=list,
        blank=True,
        encoder=DjangoJSONEncoder,
        help_text=_('Array of {title, description, amount, due_date, completed}')
    )
    attachments = models.JSONField(
        default=list,
        blank=True,
        help_text=_('Array of attachment file URLs')
    )

    # Status
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING
    )
    accepted_at = models.DateTimeField(null=True, blank=True)
    rejected_at = models.DateTimeField(null=True, blank=True)
    withdrawn_at = models.DateTimeField(null=True, blank=True)
    rejection_reason = models.TextField(blank=True, default='')

    class Meta:
        verbose_name = _('Bid')
        verbose_name_plural = _('Bids')
        ordering = ['-created_at']
        unique_together = [['project', 'developer']]
        indexes = [
            models.Index(fields=['project', 'status'], name='bid_project_status_idx'),
            models.Index(fields=['developer', 'status'], name='bid_developer_status_idx'),
        ]

    def __str__(self):
        return f"Bid on {self.project.title} by {self.developer.user.username}"

    @property
    def is_pending(self):
        return self.status == self.Status.PENDING
