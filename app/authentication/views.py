"""
Views for account endpoints.

Token issuance itself uses simplejwt's stock views (see urls.py).

Endpoints:
    GET    /api/v1/auth/me/               - Current user
    POST   /api/v1/auth/password/change/  - Change password, revoke old tokens
    DELETE /api/v1/auth/users/{id}/       - Delete account with cascade
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.serializers import CurrentUserSerializer, PasswordChangeSerializer
from authentication.services import AccountService
from core.services import error_response


class CurrentUserView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["Auth"], responses=CurrentUserSerializer)
    def get(self, request):
        return Response(CurrentUserSerializer(request.user).data)


class PasswordChangeView(APIView):
    """
    Change the caller's password.

    Every access token issued before the change stops verifying, on REST
    and on the realtime channel alike.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["Auth"], request=PasswordChangeSerializer, responses=None)
    def post(self, request):
        serializer = PasswordChangeSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)

        result = AccountService.change_password(
            request.user, serializer.validated_data["new_password"]
        )
        if not result.success:
            return error_response(result)
        return Response({"detail": "Password changed. Please log in again."})


class AccountDeleteView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["Auth"], responses={204: None})
    def delete(self, request, user_id: int):
        result = AccountService.delete_account(request.user, user_id)
        if not result.success:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)
