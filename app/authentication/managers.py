"""
Manager for platform accounts.

Accounts sign in with their email address. Two kinds exist: super admins
(platform staff) and organization admins (the temples, churches, masjids
and gurudwaras that receive donations).
"""

from django.contrib.auth.models import BaseUserManager


class UserManager(BaseUserManager):
    """
    Email-keyed account manager.

    Usage:
        # Create an organization account (role=admin)
        temple = User.objects.create_organization_admin(
            email='office@temple.example',
            password='securepassword',
            name='Sri Venkateswara Temple',
            organization_type=User.OrganizationType.TEMPLE,
        )

        # Create a platform super admin
        admin = User.objects.create_superuser(
            email='admin@example.com',
            password='adminpassword'
        )
    """

    def create_user(self, email, password=None, **extra_fields):
        """
        Create an account; without a password it gets an unusable one.

        Raises:
            ValueError: If email is empty
        """
        if not email:
            raise ValueError("The Email field must be set")

        email = self.normalize_email(email)

        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)

        user = self.model(email=email, **extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.save(using=self._db)
        return user

    def create_organization_admin(self, email, password=None, created_by=None, **extra_fields):
        """
        Create an organization account (church, masjid, gurudwara, temple).

        Organizations are the donation recipients. They sign in to the
        organization portal, never to the Django admin.

        Raises:
            ValueError: If role is overridden to something other than admin
        """
        extra_fields.setdefault("role", self.model.Role.ADMIN)
        if extra_fields["role"] != self.model.Role.ADMIN:
            raise ValueError("Organization accounts must have role=admin.")
        extra_fields["is_staff"] = False
        extra_fields["is_superuser"] = False
        return self.create_user(email, password, created_by=created_by, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        """
        Create and save a platform super admin.

        Raises:
            ValueError: If is_staff or is_superuser is not True
        """
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", self.model.Role.SUPER_ADMIN)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self.create_user(email, password, **extra_fields)

    def organizations(self):
        """Active organization accounts that can receive donations."""
        return self.filter(role=self.model.Role.ADMIN, is_active=True)
