"""
Serializers for authentication endpoints and public user projections.
"""

from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from authentication.models import User


class PublicUserSerializer(serializers.ModelSerializer):
    """Public profile fields exposed to other users (chat previews, messages)."""

    class Meta:
        model = User
        fields = ["id", "first_name", "last_name", "profile_pic"]
        read_only_fields = fields


class CurrentUserSerializer(serializers.ModelSerializer):
    """The authenticated user's own account."""

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "first_name",
            "last_name",
            "profile_pic",
            "role",
            "is_confirmed",
            "date_joined",
        ]
        read_only_fields = fields


class PasswordChangeSerializer(serializers.Serializer):
    old_password = serializers.CharField(write_only=True)
    new_password = serializers.CharField(write_only=True)

    def validate_old_password(self, value):
        user = self.context["request"].user
        if not user.check_password(value):
            raise serializers.ValidationError("Current password is incorrect.")
        return value

    def validate_new_password(self, value):
        validate_password(value, user=self.context["request"].user)
        return value
