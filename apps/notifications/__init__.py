"""Notifications app package.

Delivers booking notifications to users by e-mail and as in-app
messages. Deliveries are triggered from Celery tasks and never fail the
booking transition that caused them.
"""
