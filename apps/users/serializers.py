"""Serializers for user-related API endpoints."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Profile of the current user."""

    is_elevated = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "username",
            "full_name",
            "phone",
            "role",
            "is_elevated",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "email", "role", "is_elevated", "created_at", "updated_at"]

    def get_is_elevated(self, obj) -> bool:
        return obj.is_elevated()
