"""
URL configuration for companies and applications.

config.urls mounts company_patterns under /api/v1/companies/ (namespace
"companies") and application_patterns under /api/v1/applications/
(namespace "applications").
"""

from django.urls import path

from companies import views
from config.wiring import notification_dispatcher, realtime_channel

wired = {"realtime": realtime_channel, "notifier": notification_dispatcher}

company_patterns = [
    path(
        "<int:company_id>/",
        views.CompanyDetailView.as_view(**wired),
        name="company-detail",
    ),
    path(
        "<int:company_id>/hrs/",
        views.CompanyHRListView.as_view(**wired),
        name="company-hr-list",
    ),
    path(
        "<int:company_id>/hrs/<int:user_id>/",
        views.CompanyHRDetailView.as_view(**wired),
        name="company-hr-detail",
    ),
]

application_patterns = [
    path(
        "",
        views.ApplicationCreateView.as_view(**wired),
        name="application-create",
    ),
    path(
        "<int:application_id>/status/",
        views.ApplicationStatusView.as_view(**wired),
        name="application-status",
    ),
]
