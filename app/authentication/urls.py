"""
URL configuration for authentication endpoints.

Mounted under /api/v1/auth/.
"""

from django.urls import path
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from authentication.views import AccountDeleteView, CurrentUserView, PasswordChangeView

app_name = "authentication"

urlpatterns = [
    path("token/", TokenObtainPairView.as_view(), name="token-obtain"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token-refresh"),
    path("me/", CurrentUserView.as_view(), name="me"),
    path("password/change/", PasswordChangeView.as_view(), name="password-change"),
    path("users/<int:user_id>/", AccountDeleteView.as_view(), name="account-delete"),
]
