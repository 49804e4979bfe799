"""
Devotees application.

Devotees are the donors of the platform: mobile-number identities that
follow up to a handful of favorite organizations and donate to them.

Key components:
    - Devotee / DevoteeFavorite models
    - FavoriteService: favorites management and the "is favorite" policy
    - DevoteeJWTAuthentication: Bearer tokens carrying a devotee_id claim
    - IsDevotee: permission for devotee-only endpoints
"""
