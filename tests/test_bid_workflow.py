"""
Bid Workflow Tests

Exercises BidWorkflow directly (no HTTP):
1. Bid placement preconditions and their order
2. Acceptance of one of N bids and the project transition
3. Rejection and withdrawal
4. Guarded updates losing a race against another request
5. Real transactions racing from separate threads
"""

import threading
import uuid
from datetime import date
from decimal import Decimal
from unittest.mock import patch

import pytest
from django.db import connection

from api.exceptions import (
    ConflictError,
    InvalidInputError,
    PermissionDeniedError,
    ResourceNotFoundError,
)
from bids.models import Bid
from bids.workflow import AUTO_REJECTION_REASON, BidWorkflow
from core.db.exceptions import ConcurrentModificationError
from projects.models import Project

pytestmark = [pytest.mark.django_db, pytest.mark.workflow]


@pytest.fixture
def workflow():
    return BidWorkflow()


def place(workflow, developer, project_uuid, amount='500.00', milestones=None):
    return workflow.place_bid(
        developer,
        project_uuid,
        amount=Decimal(amount),
        timeline='1-2 weeks',
        proposal='I have shipped three similar products.',
        milestones=milestones,
    )


class StaleReadWorkflow(BidWorkflow):
    """Workflow that sees rows as they were before a competing request committed."""

    def __init__(self, stale_bid=None, stale_project=None, **kwargs):
        super().__init__(**kwargs)
        self.stale_bid = stale_bid
        self.stale_project = stale_project

    def _get_bid(self, bid_uuid):
        return self.stale_bid

    def _lock_project(self, project_id):
        return self.stale_project


# ============================================================================
# PLACEMENT
# ============================================================================

class TestPlaceBid:
    """Tests for BidWorkflow.place_bid."""

    def test_creates_pending_bid(self, workflow, project, developer):
        """A valid bid is stored as pending and leaves the project open."""
        bid = place(workflow, developer, project.uuid)

        assert bid.status == Bid.Status.PENDING
        assert bid.project == project
        assert bid.developer == developer
        assert bid.amount == Decimal('500.00')
        assert bid.currency == 'USD'

        project.refresh_from_db()
        assert project.status == Project.Status.OPEN
        assert project.selected_developer is None

    def test_storage_alias_is_used(self, project, developer):
        bid = place(BidWorkflow(using='default'), developer, project.uuid)
        assert bid._state.db == 'default'

    @pytest.mark.parametrize('amount', ['0', '-10.00'])
    def test_non_positive_amount(self, workflow, project, developer, amount):
        with pytest.raises(InvalidInputError) as exc_info:
            place(workflow, developer, project.uuid, amount=amount)

        assert str(exc_info.value.detail) == 'Bid amount must be greater than 0'
        assert not Bid.objects.exists()

    def test_amount_checked_before_project_lookup(self, workflow, developer):
        """First failing precondition wins: bad amount on a missing project."""
        with pytest.raises(InvalidInputError):
            place(workflow, developer, uuid.uuid4(), amount='0')

    def test_missing_project(self, workflow, developer):
        with pytest.raises(ResourceNotFoundError) as exc_info:
            place(workflow, developer, uuid.uuid4())

        assert str(exc_info.value.detail) == 'Project not found'

    def test_project_not_open(self, workflow, project_factory, developer):
        project = project_factory(status=Project.Status.IN_PROGRESS)

        with pytest.raises(ConflictError) as exc_info:
            place(workflow, developer, project.uuid)

        assert str(exc_info.value.detail) == 'Cannot bid on a project that is not open'

    def test_own_project(self, workflow, project_factory, developer):
        """Bidding on one's own project is a conflict."""
        own_project = project_factory(owner=developer.user)

        with pytest.raises(ConflictError) as exc_info:
            place(workflow, developer, own_project.uuid)

        assert str(exc_info.value.detail) == 'Cannot bid on your own project'
        assert not Bid.objects.exists()

    def test_duplicate_bid(self, workflow, project, developer):
        place(workflow, developer, project.uuid)

        with pytest.raises(ConflictError) as exc_info:
            place(workflow, developer, project.uuid, amount='450.00')

        assert str(exc_info.value.detail) == 'You have already placed a bid on this project'
        assert Bid.objects.filter(project=project, developer=developer).count() == 1

    def test_duplicate_caught_by_unique_constraint(self, workflow, project, developer):
        """A duplicate that slips past the pre-check is still reported as a conflict."""
        place(workflow, developer, project.uuid)

        with patch('django.db.models.query.QuerySet.exists', return_value=False):
            with pytest.raises(ConflictError):
                place(workflow, developer, project.uuid)

        assert Bid.objects.filter(project=project, developer=developer).count() == 1

    def test_milestones_outside_tolerance(self, workflow, project, developer):
        """Milestones summing to 100.02 on a 100.00 bid are rejected."""
        milestones = [
            {'title': 'Design', 'amount': Decimal('50.01'), 'due_date': date(2030, 1, 1)},
            {'title': 'Build', 'amount': Decimal('50.01'), 'due_date': date(2030, 2, 1)},
        ]

        with pytest.raises(InvalidInputError) as exc_info:
            place(workflow, developer, project.uuid, amount='100.00', milestones=milestones)

        assert str(exc_info.value.detail) == 'Total milestone amounts must equal the bid amount'
        assert not Bid.objects.exists()

    def test_milestones_within_tolerance(self, workflow, project, developer):
        """Milestones summing to 100.009 on a 100.00 bid are accepted."""
        milestones = [
            {'title': 'Everything', 'amount': Decimal('100.009'), 'due_date': date(2030, 1, 1)},
        ]

        bid = place(workflow, developer, project.uuid, amount='100.00', milestones=milestones)
        bid.refresh_from_db()

        assert len(bid.milestones) == 1
        assert bid.milestones[0]['title'] == 'Everything'
        assert bid.milestones[0]['amount'] == pytest.approx(100.009)
        assert bid.milestones[0]['due_date'] == '2030-01-01'
        assert bid.milestones[0]['completed'] is False

    def test_milestones_checked_last(self, workflow, project_factory, developer):
        """A closed project is reported before a milestone mismatch."""
        project = project_factory(status=Project.Status.IN_PROGRESS)
        milestones = [{'title': 'Too much', 'amount': Decimal('900'), 'due_date': date(2030, 1, 1)}]

        with pytest.raises(ConflictError):
            place(workflow, developer, project.uuid, amount='100.00', milestones=milestones)


# ============================================================================
# ACCEPTANCE
# ============================================================================

class TestAcceptBid:
    """Tests for BidWorkflow.accept_bid."""

    def test_accept_one_of_many(self, workflow, project, bid_factory):
        """Accepting one of N pending bids rejects the other N-1."""
        bids = [bid_factory(project=project) for _ in range(4)]
        chosen = bids[2]

        accepted = workflow.accept_bid(project.owner, chosen.uuid)

        assert accepted.status == Bid.Status.ACCEPTED
        assert accepted.accepted_at is not None

        statuses = list(Bid.objects.filter(project=project).values_list('status', flat=True))
        assert statuses.count(Bid.Status.ACCEPTED) == 1
        assert statuses.count(Bid.Status.REJECTED) == 3
        assert statuses.count(Bid.Status.PENDING) == 0

        for other in Bid.objects.filter(project=project).exclude(pk=chosen.pk):
            assert other.rejection_reason == AUTO_REJECTION_REASON
            assert other.rejected_at is not None

        project.refresh_from_db()
        assert project.status == Project.Status.IN_PROGRESS
        assert project.selected_developer == chosen.developer

    def test_worked_example(self, workflow, client_user, project_factory, developer_factory):
        """P owned by U1; D1 bids 500, D2 bids 600; U1 accepts D1."""
        project = project_factory(owner=client_user)
        d1 = developer_factory()
        d2 = developer_factory()
        bid_1 = place(workflow, d1, project.uuid, amount='500')
        bid_2 = place(workflow, d2, project.uuid, amount='600')

        workflow.accept_bid(client_user, bid_1.uuid)

        project.refresh_from_db()
        bid_1.refresh_from_db()
        bid_2.refresh_from_db()
        assert project.status == Project.Status.IN_PROGRESS
        assert project.selected_developer == d1
        assert bid_1.status == Bid.Status.ACCEPTED
        assert bid_2.status == Bid.Status.REJECTED

        with pytest.raises(ConflictError) as exc_info:
            workflow.accept_bid(client_user, bid_2.uuid)
        assert str(exc_info.value.detail) == 'Cannot accept bid on a project that is not open'

    def test_withdrawn_sibling_untouched(self, workflow, project, bid_factory):
        chosen = bid_factory(project=project)
        withdrawn = bid_factory(project=project, status=Bid.Status.WITHDRAWN)

        workflow.accept_bid(project.owner, chosen.uuid)

        withdrawn.refresh_from_db()
        assert withdrawn.status == Bid.Status.WITHDRAWN
        assert withdrawn.rejection_reason == ''

    def test_missing_bid(self, workflow, client_user):
        with pytest.raises(ResourceNotFoundError) as exc_info:
            workflow.accept_bid(client_user, uuid.uuid4())

        assert str(exc_info.value.detail) == 'Bid not found'

    def test_not_owner(self, workflow, project, bid_factory, user_factory):
        bid = bid_factory(project=project)

        with pytest.raises(PermissionDeniedError) as exc_info:
            workflow.accept_bid(user_factory(), bid.uuid)

        assert str(exc_info.value.detail) == 'Not authorized to accept this bid'
        bid.refresh_from_db()
        assert bid.status == Bid.Status.PENDING

    def test_bid_not_pending(self, workflow, project, bid_factory):
        bid = bid_factory(project=project, status=Bid.Status.WITHDRAWN)

        with pytest.raises(ConflictError) as exc_info:
            workflow.accept_bid(project.owner, bid.uuid)

        assert str(exc_info.value.detail) == 'Bid is not in pending status'
        project.refresh_from_db()
        assert project.status == Project.Status.OPEN

    def test_lost_race_on_project(self, project, bid_factory):
        """
        Another acceptance commits between our read and our update: the
        guarded project update matches nothing and nothing of ours is written.
        """
        first = bid_factory(project=project)
        second = bid_factory(project=project)
        stale_bid = Bid.objects.get(pk=first.pk)
        stale_project = Project.objects.get(pk=project.pk)

        BidWorkflow().accept_bid(project.owner, second.uuid)

        racing = StaleReadWorkflow(stale_bid=stale_bid, stale_project=stale_project)
        with pytest.raises(ConcurrentModificationError):
            racing.accept_bid(project.owner, first.uuid)

        project.refresh_from_db()
        first.refresh_from_db()
        second.refresh_from_db()
        assert project.selected_developer == second.developer
        assert first.status == Bid.Status.REJECTED
        assert second.status == Bid.Status.ACCEPTED

    def test_lost_race_on_bid_rolls_back_project(self, project, bid_factory):
        """
        The bid is withdrawn concurrently: the project update already ran but
        the bid guard fails, so the whole transaction is rolled back.
        """
        bid = bid_factory(project=project)
        sibling = bid_factory(project=project)
        stale_bid = Bid.objects.get(pk=bid.pk)

        BidWorkflow().withdraw_bid(bid.developer, bid.uuid)

        racing = StaleReadWorkflow(
            stale_bid=stale_bid,
            stale_project=Project.objects.get(pk=project.pk),
        )
        with pytest.raises(ConcurrentModificationError):
            racing.accept_bid(project.owner, bid.uuid)

        project.refresh_from_db()
        sibling.refresh_from_db()
        assert project.status == Project.Status.OPEN
        assert project.selected_developer is None
        assert sibling.status == Bid.Status.PENDING


# ============================================================================
# REJECTION / WITHDRAWAL
# ============================================================================

class TestRejectBid:
    """Tests for BidWorkflow.reject_bid."""

    def test_reject(self, workflow, project, bid_factory):
        bid = bid_factory(project=project)

        rejected = workflow.reject_bid(project.owner, bid.uuid, reason='Over budget')

        assert rejected.status == Bid.Status.REJECTED
        assert rejected.rejected_at is not None
        assert rejected.rejection_reason == 'Over budget'
        project.refresh_from_db()
        assert project.status == Project.Status.OPEN

    def test_not_owner(self, workflow, project, bid_factory, user_factory):
        bid = bid_factory(project=project)

        with pytest.raises(PermissionDeniedError) as exc_info:
            workflow.reject_bid(user_factory(), bid.uuid)

        assert str(exc_info.value.detail) == 'Not authorized to reject this bid'

    def test_not_pending(self, workflow, project, bid_factory):
        bid = bid_factory(project=project, status=Bid.Status.ACCEPTED)

        with pytest.raises(ConflictError) as exc_info:
            workflow.reject_bid(project.owner, bid.uuid)

        assert str(exc_info.value.detail) == 'Bid is not in pending status'

    def test_guard_rejects_stale_read(self, project, bid_factory):
        """A bid withdrawn after we read it cannot be rejected."""
        bid = bid_factory(project=project)
        stale_bid = Bid.objects.select_related('project').get(pk=bid.pk)
        Bid.objects.filter(pk=bid.pk).update(status=Bid.Status.WITHDRAWN)

        with pytest.raises(ConflictError):
            StaleReadWorkflow(stale_bid=stale_bid).reject_bid(project.owner, bid.uuid)

        bid.refresh_from_db()
        assert bid.status == Bid.Status.WITHDRAWN


class TestWithdrawBid:
    """Tests for BidWorkflow.withdraw_bid."""

    def test_withdraw(self, workflow, bid_factory):
        bid = bid_factory()

        withdrawn = workflow.withdraw_bid(bid.developer, bid.uuid)

        assert withdrawn.status == Bid.Status.WITHDRAWN
        assert withdrawn.withdrawn_at is not None

    def test_other_developer(self, workflow, bid_factory, developer_factory):
        bid = bid_factory()

        with pytest.raises(PermissionDeniedError) as exc_info:
            workflow.withdraw_bid(developer_factory(), bid.uuid)

        assert str(exc_info.value.detail) == 'Not authorized to withdraw this bid'

    @pytest.mark.parametrize('status', [Bid.Status.ACCEPTED, Bid.Status.REJECTED, Bid.Status.WITHDRAWN])
    def test_not_pending(self, workflow, bid_factory, status):
        """Withdrawing a non-pending bid is a conflict and leaves it unchanged."""
        bid = bid_factory(status=status)

        with pytest.raises(ConflictError) as exc_info:
            workflow.withdraw_bid(bid.developer, bid.uuid)

        assert str(exc_info.value.detail) == 'Cannot withdraw a bid that is not pending'
        bid.refresh_from_db()
        assert bid.status == status
        assert bid.withdrawn_at is None


# ============================================================================
# LISTINGS
# ============================================================================

class TestBidListings:

    def test_project_bids_owner_only(self, workflow, project, bid_factory, user_factory):
        bid_factory(project=project)
        bid_factory(project=project)
        bid_factory()

        assert workflow.project_bids(project.owner, project.uuid).count() == 2

        with pytest.raises(PermissionDeniedError):
            workflow.project_bids(user_factory(), project.uuid)

    def test_project_bids_missing_project(self, workflow, client_user):
        with pytest.raises(ResourceNotFoundError):
            workflow.project_bids(client_user, uuid.uuid4())

    def test_developer_bids(self, workflow, developer, bid_factory):
        bid_factory(developer=developer)
        bid_factory(developer=developer)
        bid_factory()

        assert workflow.developer_bids(developer).count() == 2


# ============================================================================
# CONCURRENT TRANSACTIONS
# ============================================================================

def run_concurrently(*calls):
    """
    Run each call in its own thread (own DB connection), released together.

    Returns the value or workflow error of each call, in order.
    """
    barrier = threading.Barrier(len(calls))
    results = [None] * len(calls)

    def worker(index, call):
        try:
            barrier.wait(timeout=10)
            results[index] = call()
        except (ConflictError, ConcurrentModificationError) as exc:
            results[index] = exc
        finally:
            connection.close()

    threads = [threading.Thread(target=worker, args=(i, call)) for i, call in enumerate(calls)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)

    return results


@pytest.mark.slow
@pytest.mark.django_db(transaction=True)
class TestConcurrentTransactions:
    """Two real transactions racing on the same project."""

    def test_racing_accepts_only_one_wins(self, client_user, project_factory, bid_factory):
        project = project_factory(owner=client_user)
        bids = [bid_factory(project=project) for _ in range(3)]

        results = run_concurrently(
            lambda: BidWorkflow().accept_bid(client_user, bids[0].uuid),
            lambda: BidWorkflow().accept_bid(client_user, bids[1].uuid),
        )

        winners = [result for result in results if isinstance(result, Bid)]
        losers = [
            result for result in results
            if isinstance(result, (ConflictError, ConcurrentModificationError))
        ]
        assert len(winners) == 1
        assert len(losers) == 1

        project.refresh_from_db()
        assert project.status == Project.Status.IN_PROGRESS
        assert project.selected_developer_id == winners[0].developer_id

        statuses = list(Bid.objects.filter(project=project).values_list('status', flat=True))
        assert statuses.count(Bid.Status.ACCEPTED) == 1
        assert statuses.count(Bid.Status.REJECTED) == 2
        assert statuses.count(Bid.Status.PENDING) == 0

    def test_racing_duplicate_bids_only_one_stored(self, project, developer):
        def place_once():
            return BidWorkflow().place_bid(
                developer,
                project.uuid,
                amount=Decimal('450.00'),
                timeline='2-4 weeks',
                proposal='Same offer, sent twice.',
            )

        results = run_concurrently(place_once, place_once)

        assert sum(isinstance(result, Bid) for result in results) == 1
        assert sum(isinstance(result, ConflictError) for result in results) == 1
        assert Bid.objects.filter(project=project, developer=developer).count() == 1
