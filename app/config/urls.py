"""
Root URL map.

    /health/                   liveness probe
    /schema/, /                OpenAPI schema and its ReDoc rendering
    /admin/                    Django admin
    /api/v1/auth/              tokens, current user, password change, account deletion
    /api/v1/chats/             chat creation, history, posting, deletion
    /api/v1/applications/      job applications and their review status
    /api/v1/companies/         company deletion and HR membership

The realtime socket is routed separately in chat.routing (ws/realtime/).
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from companies.urls import application_patterns, company_patterns
from core.views import health_check

admin.site.site_header = "Job Marketplace"
admin.site.site_title = "Job Marketplace admin"
admin.site.index_title = "Accounts, companies and chats"

api_v1 = [
    path("auth/", include("authentication.urls")),
    path("chats/", include("chat.urls")),
    path("companies/", include((company_patterns, "companies"))),
    path("applications/", include((application_patterns, "applications"))),
]

urlpatterns = [
    path("health/", health_check, name="health_check"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("admin/", admin.site.urls),
    path("api/v1/", include(api_v1)),
]
