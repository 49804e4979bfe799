"""
Platform accounts.

User is the login for platform staff (super_admin) and for organizations.

Organizations (churches, masjids, gurudwaras, temples) are users with
role=admin. They are the tenants of the platform and the recipients of
donations. Devotees are NOT users; see devotees.models.Devotee.
"""

from django.conf import settings
from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models

from authentication.managers import UserManager


class User(AbstractBaseUser, PermissionsMixin):
    """
    Account keyed by email address.

    Fields:
        email: Primary identifier, unique, used for login
        role: super_admin (platform staff) or admin (organization)
        name: Display name of the organization or staff member
        organization_type: Kind of place of worship (organizations only)
        phone, address: Organization contact details
        created_by: Super admin who onboarded this organization
        is_active: Whether the account is active (inactive orgs hidden)
        is_staff: Whether the user can access Django admin
        date_joined, updated_at: Timestamps
    """

    class Role(models.TextChoices):
        SUPER_ADMIN = "super_admin", "Super Admin"
        ADMIN = "admin", "Organization Admin"

    class OrganizationType(models.TextChoices):
        CHURCH = "church", "Church"
        MASJID = "masjid", "Masjid"
        GURUDWARA = "gurudwara", "Gurudwara"
        TEMPLE = "temple", "Temple"

    email = models.EmailField(
        unique=True,
        db_index=True,
        max_length=254,
        help_text="Account email address (primary identifier)",
    )
    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.ADMIN,
        db_index=True,
    )
    name = models.CharField(max_length=255, blank=True, default="")
    organization_type = models.CharField(
        max_length=20,
        choices=OrganizationType.choices,
        blank=True,
        default="",
    )
    phone = models.CharField(max_length=20, blank=True, default="")
    address = models.TextField(blank=True, default="")
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="onboarded_organizations",
    )

    is_active = models.BooleanField(
        default=True,
        help_text="Inactive organizations are hidden from devotees.",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Grants access to the Django admin.",
    )

    # Timestamps
    date_joined = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    objects = UserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["-date_joined"]

    def __str__(self):
        return self.name or self.email

    @property
    def is_organization(self) -> bool:
        """True for organization accounts (donation recipients)."""
        return self.role == self.Role.ADMIN

    def get_full_name(self):
        return self.name or self.email

    def get_short_name(self):
        return self.name or self.email.split("@")[0]
