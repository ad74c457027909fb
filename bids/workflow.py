"""
Bid Workflow - Every Bid and Project state transition.

BidWorkflow is the only code that changes ``Bid.status`` or
``Project.status``. It is constructed with a database alias and runs all of
its queries against that alias.

Transitions:
- place_bid:    creates a pending bid on an open project
- accept_bid:   pending -> accepted, project open -> in-progress, every other
                pending bid of the project -> rejected, in one transaction
- reject_bid:   pending -> rejected (project owner)
- withdraw_bid: pending -> withdrawn (bidding developer)

Status changes are guarded updates (``filter(pk=..., status=expected)
.update(...)``). A guard that matches no row means another request got there
first: inside accept_bid that raises ConcurrentModificationError and rolls
the whole transaction back.
"""

import logging
from decimal import Decimal

from django.db import DEFAULT_DB_ALIAS, IntegrityError, transaction
from django.utils import timezone

from api.exceptions import (
    ConflictError,
    InvalidInputError,
    PermissionDeniedError,
    ResourceNotFoundError,
)
from core.db.exceptions import ConcurrentModificationError
from projects.models import Project

from .models import Bid

logger = logging.getLogger(__name__)

# Milestone amounts may differ from the bid amount by at most this much
MILESTONE_TOLERANCE = Decimal('0.01')

AUTO_REJECTION_REASON = 'Another bid was accepted'


def _to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _milestone_record(milestone: dict) -> dict:
    due_date = milestone['due_date']
    return {
        'title': milestone['title'],
        'description': milestone.get('description', ''),
        'amount': float(_to_decimal(milestone['amount'])),
        'due_date': due_date.isoformat() if hasattr(due_date, 'isoformat') else due_date,
        'completed': milestone.get('completed', False),
    }


class BidWorkflow:
    """
    Enforces the bid lifecycle against one database.

    Usage:
        workflow = BidWorkflow()                  # default database
        workflow = BidWorkflow(using='replica')   # any configured alias

        bid = workflow.place_bid(profile, project_uuid, amount=Decimal('500'),
                                 timeline='1-2 weeks', proposal='...')
        workflow.accept_bid(owner, bid.uuid)
    """

    def __init__(self, using: str = DEFAULT_DB_ALIAS):
        self.using = using

    # ------------------------------------------------------------------
    # Query helpers
    # ------------------------------------------------------------------

    def _projects(self):
        return Project.objects.using(self.using)

    def _bids(self):
        return Bid.objects.using(self.using)

    def _get_bid(self, bid_uuid) -> Bid:
        bid = (
            self._bids()
            .select_related('project', 'developer__user')
            .filter(uuid=bid_uuid)
            .first()
        )
        if bid is None:
            raise ResourceNotFoundError('Bid', bid_uuid)
        return bid

    def _lock_project(self, project_id) -> Project:
        """Load the project row with ``SELECT ... FOR UPDATE``."""
        return self._projects().select_for_update().get(pk=project_id)

    def project_bids(self, user, project_uuid):
        """
        Bids on a project, newest first. Only the project owner may list them.

        Raises:
            ResourceNotFoundError: project does not exist
            PermissionDeniedError: caller does not own the project
        """
        project = self._projects().filter(uuid=project_uuid).first()
        if project is None:
            raise ResourceNotFoundError('Project', project_uuid)
        if project.owner_id != user.pk:
            raise PermissionDeniedError(detail="Not authorized to view bids for this project")

        return (
            self._bids()
            .filter(project=project)
            .select_related('project', 'developer__user')
            .order_by('-created_at')
        )

    def developer_bids(self, developer):
        """Bids placed by ``developer``, newest first."""
        return (
            self._bids()
            .filter(developer=developer)
            .select_related('project', 'developer__user')
            .order_by('-created_at')
        )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def place_bid(
        self,
        developer,
        project_uuid,
        amount,
        timeline: str,
        proposal: str,
        milestones=None,
        message: str = '',
        currency: str = 'USD',
        attachments=None,
    ) -> Bid:
        """
        Create a pending bid.

        Checks run in order and the first failure wins: amount > 0, project
        exists, project is open, caller is not the owner, no earlier bid by
        this developer, milestone amounts sum to the bid amount.

        Raises:
            InvalidInputError: non-positive amount or milestone mismatch
            ResourceNotFoundError: project does not exist
            ConflictError: project not open, own project, or duplicate bid
        """
        if amount is None or _to_decimal(amount) <= 0:
            raise InvalidInputError(detail="Bid amount must be greater than 0", field_name='amount')
        amount = _to_decimal(amount)

        with transaction.atomic(using=self.using):
            project = self._projects().select_for_update().filter(uuid=project_uuid).first()
            if project is None:
                raise ResourceNotFoundError('Project', project_uuid)

            if project.status != Project.Status.OPEN:
                raise ConflictError(
                    detail="Cannot bid on a project that is not open",
                    current_state=project.status,
                    required_state=Project.Status.OPEN
                )

            if project.owner_id == developer.user_id:
                raise ConflictError(detail="Cannot bid on your own project")

            if self._bids().filter(project=project, developer=developer).exists():
                raise ConflictError(detail="You have already placed a bid on this project")

            milestones = milestones or []
            if milestones:
                total = sum((_to_decimal(m['amount']) for m in milestones), Decimal('0'))
                if abs(total - amount) > MILESTONE_TOLERANCE:
                    raise InvalidInputError(
                        detail="Total milestone amounts must equal the bid amount",
                        field_name='milestones'
                    )

            try:
                with transaction.atomic(using=self.using):
                    bid = self._bids().create(
                        project=project,
                        developer=developer,
                        amount=amount,
                        currency=currency,
                        timeline=timeline,
                        proposal=proposal,
                        message=message or '',
                        milestones=[_milestone_record(m) for m in milestones],
                        attachments=attachments or [],
                    )
            except IntegrityError as exc:
                logger.warning(f"Duplicate bid rejected by constraint on project {project.uuid}: {exc}")
                raise ConflictError(detail="You have already placed a bid on this project") from exc

        logger.info(f"Bid {bid.uuid} placed on project {project.uuid} by developer {developer.uuid}")
        return bid

    def accept_bid(self, user, bid_uuid) -> Bid:
        """
        Accept a pending bid and close the project to further bidding.

        In one transaction, with the project row locked:
        1. project open -> in-progress, selected developer = bid developer
        2. bid pending -> accepted
        3. every other pending bid on the project -> rejected

        Raises:
            ResourceNotFoundError: bid does not exist
            PermissionDeniedError: caller does not own the project
            ConflictError: project not open or bid not pending
            ConcurrentModificationError: a guarded update lost a race
        """
        with transaction.atomic(using=self.using):
            bid = self._get_bid(bid_uuid)
            project = self._lock_project(bid.project_id)

            if project.owner_id != user.pk:
                raise PermissionDeniedError(detail="Not authorized to accept this bid")

            if project.status != Project.Status.OPEN:
                raise ConflictError(
                    detail="Cannot accept bid on a project that is not open",
                    current_state=project.status,
                    required_state=Project.Status.OPEN
                )

            if bid.status != Bid.Status.PENDING:
                raise ConflictError(
                    detail="Bid is not in pending status",
                    current_state=bid.status,
                    required_state=Bid.Status.PENDING
                )

            now = timezone.now()

            updated = self._projects().filter(
                pk=project.pk,
                status=Project.Status.OPEN
            ).update(
                status=Project.Status.IN_PROGRESS,
                selected_developer_id=bid.developer_id,
                updated_at=now
            )
            if updated != 1:
                raise ConcurrentModificationError(
                    'Project', project.uuid, expected_status=Project.Status.OPEN
                )

            updated = self._bids().filter(
                pk=bid.pk,
                status=Bid.Status.PENDING
            ).update(
                status=Bid.Status.ACCEPTED,
                accepted_at=now,
                updated_at=now
            )
            if updated != 1:
                raise ConcurrentModificationError(
                    'Bid', bid.uuid, expected_status=Bid.Status.PENDING
                )

            rejected = self._bids().filter(
                project_id=project.pk,
                status=Bid.Status.PENDING
            ).exclude(pk=bid.pk).update(
                status=Bid.Status.REJECTED,
                rejected_at=now,
                rejection_reason=AUTO_REJECTION_REASON,
                updated_at=now
            )

        logger.info(
            f"Bid {bid.uuid} accepted on project {project.uuid}; "
            f"{rejected} competing bid(s) rejected"
        )
        bid.refresh_from_db()
        return bid

    def reject_bid(self, user, bid_uuid, reason: str = '') -> Bid:
        """
        Reject a pending bid. Only the project owner may reject.

        Raises:
            ResourceNotFoundError, PermissionDeniedError, ConflictError
        """
        bid = self._get_bid(bid_uuid)

        if bid.project.owner_id != user.pk:
            raise PermissionDeniedError(detail="Not authorized to reject this bid")

        self._guarded_close(
            bid,
            Bid.Status.REJECTED,
            conflict_detail="Bid is not in pending status",
            rejected_at=timezone.now(),
            rejection_reason=reason or ''
        )

        logger.info(f"Bid {bid.uuid} rejected by project owner {user.uuid}")
        return bid

    def withdraw_bid(self, developer, bid_uuid) -> Bid:
        """
        Withdraw a pending bid. Only the bidding developer may withdraw.

        Raises:
            ResourceNotFoundError, PermissionDeniedError, ConflictError
        """
        bid = self._get_bid(bid_uuid)

        if bid.developer_id != developer.pk:
            raise PermissionDeniedError(detail="Not authorized to withdraw this bid")

        self._guarded_close(
            bid,
            Bid.Status.WITHDRAWN,
            conflict_detail="Cannot withdraw a bid that is not pending",
            withdrawn_at=timezone.now()
        )

        logger.info(f"Bid {bid.uuid} withdrawn by developer {developer.uuid}")
        return bid

    def _guarded_close(self, bid: Bid, new_status: str, conflict_detail: str, **fields):
        """Move ``bid`` from pending to ``new_status`` with a single guarded update."""
        if bid.status != Bid.Status.PENDING:
            raise ConflictError(
                detail=conflict_detail,
                current_state=bid.status,
                required_state=Bid.Status.PENDING
            )

        updated = self._bids().filter(
            pk=bid.pk,
            status=Bid.Status.PENDING
        ).update(
            status=new_status,
            updated_at=timezone.now(),
            **fields
        )
        if updated != 1:
            raise ConflictError(detail=conflict_detail, required_state=Bid.Status.PENDING)

        bid.refresh_from_db()
