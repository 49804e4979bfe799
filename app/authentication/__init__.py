"""
Authentication application.

This app provides platform accounts: super admins and the organizations
(places of worship) that receive donations.

Key components:
    - User model: Custom email-based account with a role
    - UserManager: create_organization_admin / create_superuser

Usage:
    from authentication.models import User
"""
