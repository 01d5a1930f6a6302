"""Users app package.

Defines the custom user model with its role and the permission classes
built on it. Use ``apps.users.models.CustomUser`` as the AUTH_USER_MODEL
throughout the project.
"""
