"""
REST views for companies and applications.

Endpoints:
    POST   /api/v1/applications/                   - Apply to a job
    PATCH  /api/v1/applications/{id}/status/       - Change review status
    POST   /api/v1/companies/{id}/hrs/             - Add an HR member
    DELETE /api/v1/companies/{id}/hrs/{user_id}/   - Remove an HR member
    DELETE /api/v1/companies/{id}/                 - Delete company with cascade

The realtime channel and notification dispatcher are injected through
as_view(realtime=..., notifier=...) from config.wiring.
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from companies.serializers import (
    ApplicationCreateSerializer,
    ApplicationSerializer,
    ApplicationStatusSerializer,
    CompanySerializer,
    HRMemberSerializer,
)
from companies.services import ApplicationService, CompanyService
from core.services import error_response


class CompanyAPIView(APIView):
    permission_classes = [IsAuthenticated]
    realtime = None
    notifier = None


class ApplicationCreateView(CompanyAPIView):
    @extend_schema(
        tags=["Applications"],
        request=ApplicationCreateSerializer,
        responses={201: ApplicationSerializer},
    )
    def post(self, request):
        serializer = ApplicationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = ApplicationService.submit_application(
            request.user,
            serializer.validated_data["job_id"],
            serializer.validated_data["notes"],
            realtime=self.realtime,
            notifier=self.notifier,
        )
        if not result.success:
            return error_response(result)
        return Response(ApplicationSerializer(result.data).data, status=status.HTTP_201_CREATED)


class ApplicationStatusView(CompanyAPIView):
    @extend_schema(
        tags=["Applications"],
        request=ApplicationStatusSerializer,
        responses=ApplicationSerializer,
    )
    def patch(self, request, application_id: int):
        serializer = ApplicationStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = ApplicationService.update_status(
            request.user,
            application_id,
            serializer.validated_data["status"],
            serializer.validated_data.get("notes"),
            realtime=self.realtime,
            notifier=self.notifier,
        )
        if not result.success:
            return error_response(result)
        return Response(ApplicationSerializer(result.data).data)


class CompanyDetailView(CompanyAPIView):
    @extend_schema(tags=["Companies"], responses={204: None})
    def delete(self, request, company_id: int):
        result = CompanyService.delete_company(request.user, company_id)
        if not result.success:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)


class CompanyHRListView(CompanyAPIView):
    @extend_schema(tags=["Companies"], request=HRMemberSerializer, responses=CompanySerializer)
    def post(self, request, company_id: int):
        serializer = HRMemberSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = CompanyService.add_hr(
            request.user, company_id, serializer.validated_data["user_id"]
        )
        if not result.success:
            return error_response(result)
        return Response(CompanySerializer(result.data).data)


class CompanyHRDetailView(CompanyAPIView):
    @extend_schema(tags=["Companies"], responses={204: None})
    def delete(self, request, company_id: int, user_id: int):
        result = CompanyService.remove_hr(request.user, company_id, user_id)
        if not result.success:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)
