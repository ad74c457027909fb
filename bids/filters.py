"""
Bids API Filters
"""

import django_filters

from .models import Bid


class BidStatusFilter(django_filters.FilterSet):
    """FilterSet for the developer's bid listing."""

    status = django_filters.ChoiceFilter(choices=Bid.Status.choices)

    class Meta:
        model = Bid
        fields = ['status']
