"""
Bids API URLs
"""

from django.urls import path

from .viewsets import BidViewSet

app_name = 'bids'

urlpatterns = [
    path('place', BidViewSet.as_view({'post': 'place'}), name='place'),
    path('project/<uuid:project_uuid>', BidViewSet.as_view({'get': 'project_bids'}), name='project-bids'),
    path('my-bids', BidViewSet.as_view({'get': 'my_bids'}), name='my-bids'),
    path('<uuid:uuid>/accept', BidViewSet.as_view({'put': 'accept'}), name='accept'),
    path('<uuid:uuid>/reject', BidViewSet.as_view({'put': 'reject'}), name='reject'),
    path('<uuid:uuid>/withdraw', BidViewSet.as_view({'put': 'withdraw'}), name='withdraw'),
]
