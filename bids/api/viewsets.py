"""
Bids API Views - REST API endpoints.

This module provides the bid ViewSet. Every state change is delegated to
``bids.workflow.BidWorkflow``; the views only parse input, pick the caller
identity and render the result.

    place:         POST /bids/place
    project_bids:  GET  /bids/project/{project_uuid}  (also /projects/{uuid}/bids)
    my_bids:       GET  /bids/my-bids
    accept:        PUT  /bids/{uuid}/accept
    reject:        PUT  /bids/{uuid}/reject
    withdraw:      PUT  /bids/{uuid}/withdraw
"""

import logging

from rest_framework import permissions, status, viewsets
from rest_framework.response import Response

from accounts.permissions import IsDeveloper
from api.base import message_response

from ..filters import BidStatusFilter
from ..models import Bid
from ..workflow import BidWorkflow
from .serializers import BidCreateSerializer, BidRejectSerializer, BidSerializer

logger = logging.getLogger(__name__)


class BidViewSet(viewsets.GenericViewSet):
    """ViewSet for developer bids and the acceptance workflow."""

    queryset = Bid.objects.select_related('project', 'developer__user')
    serializer_class = BidSerializer
    lookup_field = 'uuid'
    workflow_class = BidWorkflow

    filterset_classes = {
        'my_bids': BidStatusFilter,
    }

    @property
    def filterset_class(self):
        return self.filterset_classes.get(self.action)

    def get_permissions(self):
        if self.action in ('place', 'my_bids', 'withdraw'):
            return [IsDeveloper()]
        return [permissions.IsAuthenticated()]

    def get_serializer_class(self):
        """Return appropriate serializer based on action."""
        if self.action == 'place':
            return BidCreateSerializer
        if self.action == 'reject':
            return BidRejectSerializer
        return BidSerializer

    def get_workflow(self) -> BidWorkflow:
        return self.workflow_class()

    def _paginated(self, queryset):
        queryset = self.filter_queryset(queryset)
        page = self.paginate_queryset(queryset)
        serializer = BidSerializer(page, many=True, context=self.get_serializer_context())
        return self.get_paginated_response(serializer.data)

    def place(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        bid = self.get_workflow().place_bid(
            request.user.developer_profile,
            data['project_id'],
            amount=data['amount'],
            timeline=data['timeline'],
            proposal=data['proposal'],
            milestones=data.get('milestones'),
            message=data.get('message', ''),
            currency=data.get('currency', 'USD'),
            attachments=data.get('attachments'),
        )
        return Response(BidSerializer(bid).data, status=status.HTTP_201_CREATED)

    def project_bids(self, request, project_uuid=None):
        """Bids on one project; project owner only."""
        return self._paginated(self.get_workflow().project_bids(request.user, project_uuid))

    def my_bids(self, request):
        return self._paginated(self.get_workflow().developer_bids(request.user.developer_profile))

    def accept(self, request, uuid=None):
        """
        Accept a pending bid.

        Returns:
            200: ``{"message", "bid"}``
            400: project not open, bid not pending, or lost a concurrent race
            403: caller does not own the project
            404: bid not found
        """
        bid = self.get_workflow().accept_bid(request.user, uuid)
        return message_response('Bid accepted successfully', 'bid', BidSerializer(bid).data)

    def reject(self, request, uuid=None):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        bid = self.get_workflow().reject_bid(
            request.user, uuid, reason=serializer.validated_data.get('reason', '')
        )
        return message_response('Bid rejected successfully', 'bid', BidSerializer(bid).data)

    def withdraw(self, request, uuid=None):
        bid = self.get_workflow().withdraw_bid(request.user.developer_profile, uuid)
        return message_response('Bid withdrawn successfully', 'bid', BidSerializer(bid).data)
