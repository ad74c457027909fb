"""
DevConnect Test Configuration - pytest fixtures and factories

This module provides:
- factory_boy factories for accounts, projects and bids
- Shared fixtures for API tests (clients, developers, projects)

RUNNING TESTS:
# Run all tests
pytest tests/ -v

# Run by module
pytest tests/test_bid_workflow.py -v

# Run by marker
pytest -m workflow -v
"""

import uuid
from datetime import timedelta
from decimal import Decimal

import factory
import pytest
from django.utils import timezone
from factory.django import DjangoModelFactory


# ============================================================================
# USER FACTORIES
# ============================================================================

class UserFactory(DjangoModelFactory):
    """Factory for client accounts (role ``user``)."""

    class Meta:
        model = 'accounts.User'
        django_get_or_create = ('email',)
        skip_postgeneration_save = True

    username = factory.LazyAttribute(lambda o: f"user_{uuid.uuid4().hex[:8]}")
    email = factory.LazyAttribute(lambda o: f"{o.username}@example.com")
    full_name = factory.Faker('name')
    role = 'user'
    password = 'testpass123'
    is_active = True

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        """Override create to handle password properly."""
        password = kwargs.pop('password', None)
        user = super()._create(model_class, *args, **kwargs)
        if password:
            user.set_password(password)
            user.save()
        return user


class DeveloperProfileFactory(DjangoModelFactory):
    """Factory for DeveloperProfile; creates its developer account."""

    class Meta:
        model = 'accounts.DeveloperProfile'

    user = factory.SubFactory(UserFactory, role='developer')
    skills = factory.LazyFunction(lambda: ['python', 'django'])
    experience = 'senior'
    years_of_experience = 5
    hourly_rate = Decimal('60.00')


# ============================================================================
# PROJECT / BID FACTORIES
# ============================================================================

class ProjectFactory(DjangoModelFactory):
    """Factory for open projects."""

    class Meta:
        model = 'projects.Project'

    owner = factory.SubFactory(UserFactory)
    title = factory.Faker('sentence', nb_words=4)
    description = factory.Faker('paragraph')
    category = 'web-development'
    skills = factory.LazyFunction(lambda: ['python', 'react'])
    budget_min = Decimal('500.00')
    budget_max = Decimal('1000.00')
    budget_currency = 'USD'
    timeline = '1-2 months'
    deadline = factory.LazyFunction(lambda: timezone.now() + timedelta(days=30))
    status = 'open'


class BidFactory(DjangoModelFactory):
    """Factory for pending bids."""

    class Meta:
        model = 'bids.Bid'

    project = factory.SubFactory(ProjectFactory)
    developer = factory.SubFactory(DeveloperProfileFactory)
    amount = Decimal('500.00')
    timeline = '1-2 weeks'
    proposal = factory.Faker('paragraph')
    status = 'pending'


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def user_factory(db):
    """Provide UserFactory for tests."""
    return UserFactory


@pytest.fixture
def developer_factory(db):
    """Provide DeveloperProfileFactory for tests."""
    return DeveloperProfileFactory


@pytest.fixture
def project_factory(db):
    """Provide ProjectFactory for tests."""
    return ProjectFactory


@pytest.fixture
def bid_factory(db):
    """Provide BidFactory for tests."""
    return BidFactory


@pytest.fixture
def client_user(db):
    """A client account that posts projects."""
    return UserFactory()


@pytest.fixture
def developer(db):
    """A developer profile (with its account)."""
    return DeveloperProfileFactory()


@pytest.fixture
def project(db, client_user):
    """An open project owned by ``client_user``."""
    return ProjectFactory(owner=client_user)


@pytest.fixture
def api_client(db):
    """Provide a DRF API test client."""
    from rest_framework.test import APIClient
    return APIClient()


@pytest.fixture
def authenticate(api_client):
    """Return a helper that authenticates ``api_client`` as the given user."""
    def _authenticate(user):
        api_client.force_authenticate(user=user)
        return api_client
    return _authenticate
