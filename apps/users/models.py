"""User domain models.

Every account carries exactly one role. Roles in ``ELEVATED_ROLES`` act as
staff of the storage: they may confirm, reject, cancel and close out any
booking. Everybody else only manages the bookings they own.
"""

from __future__ import annotations

from typing import Any

from django.contrib.auth.models import AbstractUser, BaseUserManager  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class CustomUserManager(BaseUserManager):
    """User manager that logs in by email."""

    use_in_migrations = True

    def _create_user(self, email: str, password: str | None, **extra_fields: Any):
        if not email:
            raise ValueError("Email is required to create a user.")
        email = self.normalize_email(email)

        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_user(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        extra_fields.setdefault("role", CustomUser.RoleChoices.USER)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", CustomUser.RoleChoices.SUPER_ADMIN)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self._create_user(email, password, **extra_fields)


class CustomUser(AbstractUser):
    """Platform user with a role."""

    class RoleChoices(models.TextChoices):
        USER = "user", _("User")
        REQUESTER = "requester", _("Requester")
        TENANT_ADMIN = "tenant_admin", _("Tenant admin")
        STORAGE_MANAGER = "storage_manager", _("Storage manager")
        ADMIN = "admin", _("Admin")
        MAIN_ADMIN = "main_admin", _("Main admin")
        SUPER_ADMIN = "super_admin", _("Super admin")
        SUPER_VERA = "superVera", _("SuperVera")

    username = models.CharField(
        _("Display name"),
        max_length=150,
        blank=True,
        help_text=_("Optional, shown in the interface and in e-mails."),
    )
    email = models.EmailField(_("Email"), unique=True)
    full_name = models.CharField(_("Full name"), max_length=255, blank=True)
    phone = models.CharField(_("Phone"), max_length=20, blank=True)
    role = models.CharField(
        _("Role"),
        max_length=20,
        choices=RoleChoices.choices,
        default=RoleChoices.USER,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CustomUserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["username"]

    class Meta:
        verbose_name = _("User")
        verbose_name_plural = _("Users")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.email} ({self.get_role_display()})"

    @property
    def display_name(self) -> str:
        return self.full_name or self.username or self.email

    def is_elevated(self) -> bool:
        """Staff-level actor allowed to manage any booking."""
        return self.role in ELEVATED_ROLES or self.is_superuser


ELEVATED_ROLES = frozenset(
    {
        CustomUser.RoleChoices.ADMIN,
        CustomUser.RoleChoices.SUPER_ADMIN,
        CustomUser.RoleChoices.MAIN_ADMIN,
        CustomUser.RoleChoices.SUPER_VERA,
        CustomUser.RoleChoices.STORAGE_MANAGER,
    }
)


# Short alias used by tests and services
User = CustomUser
