"""Bookings app package.

This app encapsulates the booking domain: bookings and their item
lines, the availability calculation over inventory, and the lifecycle
commands (create, confirm, reject, cancel, delete, pickup, return).
Every command runs in one database transaction and locks the storage
items it checks. On Postgres this keeps concurrent bookings from
over-committing an item; SQLite has no row locks, so there the check
and the insert are not serialised.
"""
