"""
URL configuration for DevConnect Lite.

Routes:
    /health             - Health check (no auth)
    /auth/...           - Signup, login, profile
    /projects/...       - Project postings
    /bids/...           - Bids and the acceptance workflow
    /admin/             - Django admin
    /api/schema/        - OpenAPI schema
    /api/docs/          - Swagger UI
"""
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from .views import health_check

urlpatterns = [
    path('health', health_check, name='health_check'),

    path('auth/', include('accounts.urls')),
    path('projects/', include('projects.api.urls')),
    path('bids/', include('bids.api.urls')),

    path('admin/', admin.site.urls),

    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
]

if settings.DEBUG:
    urlpatterns += static(settings.EXPORT_URL, document_root=settings.EXPORT_ROOT)

handler404 = 'devconnect.views.custom_404_handler'
handler500 = 'devconnect.views.custom_500_handler'
