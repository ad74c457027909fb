"""
Projects API Views - REST API endpoints.

This module provides the project ViewSet:
- Create (clients only)
- Open-project listing with filters (developers only)
- Owner's project listing
- Detail, partial update and delete (owner, only while open)
- JSON export of every project (clients only)

Status is never written here; bid acceptance in ``bids.workflow`` is the only
path from ``open`` to ``in-progress``. Update and delete lock the project row
so they cannot interleave with an acceptance, and a project that has
received bids is never deleted.
"""

import logging
from pathlib import Path

from django.conf import settings
from django.db import transaction
from rest_framework import permissions, status, viewsets
from rest_framework.renderers import JSONRenderer
from rest_framework.response import Response

from accounts.permissions import IsClient, IsDeveloper
from api.base import message_response
from api.exceptions import ConflictError, PermissionDeniedError, ResourceNotFoundError

from ..filters import OpenProjectFilter, ProjectStatusFilter
from ..models import Project
from .serializers import ProjectSerializer, ProjectWriteSerializer

logger = logging.getLogger(__name__)

EXPORT_FILENAME = 'projects_export.json'


class ProjectViewSet(viewsets.GenericViewSet):
    """
    ViewSet for client projects.

    create:       POST   /projects/create
    open:         GET    /projects/open
    my_projects:  GET    /projects/my-projects
    export_json:  GET    /projects/export-json
    retrieve:     GET    /projects/{uuid}
    update:       PUT    /projects/{uuid}
    destroy:      DELETE /projects/{uuid}
    """

    queryset = Project.objects.select_related('owner', 'selected_developer__user')
    serializer_class = ProjectSerializer
    lookup_field = 'uuid'

    filterset_classes = {
        'open': OpenProjectFilter,
        'my_projects': ProjectStatusFilter,
    }

    @property
    def filterset_class(self):
        return self.filterset_classes.get(self.action)

    def get_permissions(self):
        if self.action in ('create', 'export_json'):
            return [IsClient()]
        if self.action == 'open':
            return [IsDeveloper()]
        return [permissions.IsAuthenticated()]

    def get_serializer_class(self):
        """Return appropriate serializer based on action."""
        if self.action in ('create', 'update'):
            return ProjectWriteSerializer
        return ProjectSerializer

    def get_object(self):
        project = self.get_queryset().filter(uuid=self.kwargs['uuid']).first()
        if project is None:
            raise ResourceNotFoundError('Project', self.kwargs['uuid'])
        return project

    def _lock_owned_open_project(self, verb):
        """
        Lock the project row and check the caller may ``verb`` it.

        Must run inside a transaction.
        """
        project = (
            Project.objects.select_for_update()
            .filter(uuid=self.kwargs['uuid'])
            .first()
        )
        if project is None:
            raise ResourceNotFoundError('Project', self.kwargs['uuid'])

        if project.owner_id != self.request.user.pk:
            raise PermissionDeniedError(detail=f"Not authorized to {verb} this project")

        if not project.is_open:
            raise ConflictError(
                detail=f"Cannot {verb} project that is not open",
                current_state=project.status,
                required_state=Project.Status.OPEN
            )
        return project

    def _paginated(self, queryset):
        queryset = self.filter_queryset(queryset)
        page = self.paginate_queryset(queryset)
        serializer = ProjectSerializer(page, many=True, context=self.get_serializer_context())
        return self.get_paginated_response(serializer.data)

    def create(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        project = serializer.save(owner=request.user)

        logger.info(f"Project {project.uuid} created by user {request.user.uuid}")
        return Response(serializer.data, status=status.HTTP_201_CREATED)

    def open(self, request):
        """Open projects, newest first, with category/skills/budget filters."""
        return self._paginated(self.get_queryset().filter(status=Project.Status.OPEN))

    def my_projects(self, request):
        return self._paginated(self.get_queryset().filter(owner=request.user))

    def retrieve(self, request, uuid=None):
        serializer = self.get_serializer(self.get_object())
        return Response(serializer.data)

    def update(self, request, uuid=None):
        """Partial update; budget range is re-checked against stored values."""
        with transaction.atomic():
            project = self._lock_owned_open_project('update')
            serializer = self.get_serializer(project, data=request.data, partial=True)
            serializer.is_valid(raise_exception=True)
            serializer.save()

        logger.info(f"Project {project.uuid} updated by user {request.user.uuid}")
        return Response(serializer.data)

    def destroy(self, request, uuid=None):
        with transaction.atomic():
            project = self._lock_owned_open_project('delete')
            if project.bids.exists():
                raise ConflictError(detail="Cannot delete project that has bids")
            project_uuid = project.uuid
            project.delete()

        logger.info(f"Project {project_uuid} deleted by user {request.user.uuid}")
        return message_response('Project deleted successfully')

    def export_json(self, request):
        """
        Write every project (with owner summary) to the export directory.

        Returns:
            200: ``{"message", "file", "count"}``
        """
        projects = Project.objects.select_related('owner', 'selected_developer__user')
        data = ProjectSerializer(projects, many=True).data

        export_root = Path(settings.EXPORT_ROOT)
        export_root.mkdir(parents=True, exist_ok=True)
        export_path = export_root / EXPORT_FILENAME
        export_path.write_bytes(
            JSONRenderer().render(data, renderer_context={'indent': 2})
        )

        logger.info(f"Exported {len(data)} projects to {export_path}")
        return Response({
            'message': 'Projects exported successfully!',
            'file': f'{settings.EXPORT_URL}{EXPORT_FILENAME}',
            'count': len(data),
        })
