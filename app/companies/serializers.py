"""
Serializers for company and application endpoints.
"""

from rest_framework import serializers

from authentication.serializers import PublicUserSerializer
from companies.models import Application, Company


class CompanySerializer(serializers.ModelSerializer):
    hr_members = PublicUserSerializer(many=True, read_only=True)

    class Meta:
        model = Company
        fields = ["id", "name", "email", "created_by", "hr_members", "created_at"]
        read_only_fields = fields


class ApplicationSerializer(serializers.ModelSerializer):
    job_title = serializers.CharField(source="job.title", read_only=True)

    class Meta:
        model = Application
        fields = [
            "id",
            "job",
            "job_title",
            "applicant",
            "status",
            "notes",
            "reviewed_by",
            "reviewed_at",
            "created_at",
        ]
        read_only_fields = fields


class ApplicationCreateSerializer(serializers.Serializer):
    job_id = serializers.IntegerField(min_value=1)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class ApplicationStatusSerializer(serializers.Serializer):
    """
    Status change request.

    The status is not restricted to choices here; ApplicationService
    reports unknown values as INVALID_STATUS after the permission check.
    """

    status = serializers.CharField()
    notes = serializers.CharField(required=False, allow_blank=True)


class HRMemberSerializer(serializers.Serializer):
    user_id = serializers.IntegerField(min_value=1)
