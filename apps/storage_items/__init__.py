"""Storage items app package.

Holds the rentable items, the storage locations they live in and the
stock counters the booking lifecycle reads and adjusts.
"""
