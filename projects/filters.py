"""
Projects API Filters

django-filter FilterSets for the project listing endpoints.
"""

import json

import django_filters
from django.db import connections
from django.db.models import Q

from .models import Project


class OpenProjectFilter(django_filters.FilterSet):
    """
    FilterSet for the open-projects listing.

    - category: exact category slug
    - skills: comma-separated list, matches projects requiring any of them
      (exact tag match, case-sensitive)
    - minBudget / maxBudget: bounds on the budget range
    """

    category = django_filters.ChoiceFilter(choices=Project.Category.choices)
    skills = django_filters.CharFilter(method='filter_skills', label='Skills (comma separated)')
    minBudget = django_filters.NumberFilter(field_name='budget_min', lookup_expr='gte')
    maxBudget = django_filters.NumberFilter(field_name='budget_max', lookup_expr='lte')

    class Meta:
        model = Project
        fields = ['category', 'skills', 'minBudget', 'maxBudget']

    def filter_skills(self, queryset, name, value):
        """Exact, case-sensitive match on any of the requested skill tags."""
        skills = [skill.strip() for skill in value.split(',') if skill.strip()]
        if not skills:
            return queryset

        query = Q()
        if connections[queryset.db].features.supports_json_field_contains:
            for skill in skills:
                query |= Q(skills__contains=[skill])
            return queryset.filter(query)

        # No JSON containment (SQLite): narrow on the encoded element text,
        # then compare the decoded lists exactly
        for skill in skills:
            query |= Q(skills__icontains=json.dumps(skill))
        wanted = set(skills)
        matching = [
            pk for pk, tags in queryset.filter(query).values_list('pk', 'skills')
            if wanted.intersection(tags)
        ]
        return queryset.filter(pk__in=matching)


class ProjectStatusFilter(django_filters.FilterSet):
    """FilterSet for the owner's project listing."""

    status = django_filters.ChoiceFilter(choices=Project.Status.choices)

    class Meta:
        model = Project
        fields = ['status']
