"""
Projects API URLs
"""

from django.urls import path

from bids.api.viewsets import BidViewSet

from .viewsets import ProjectViewSet

app_name = 'projects'

project_detail = ProjectViewSet.as_view({
    'get': 'retrieve',
    'put': 'update',
    'delete': 'destroy',
})

urlpatterns = [
    path('create', ProjectViewSet.as_view({'post': 'create'}), name='create'),
    path('open', ProjectViewSet.as_view({'get': 'open'}), name='open'),
    path('my-projects', ProjectViewSet.as_view({'get': 'my_projects'}), name='my-projects'),
    path('export-json', ProjectViewSet.as_view({'get': 'export_json'}), name='export-json'),
    path('<uuid:uuid>', project_detail, name='detail'),
    path('<uuid:project_uuid>/bids', BidViewSet.as_view({'get': 'project_bids'}), name='bids'),
]
