"""
iFound: lost-and-found tracking for a small institution.

Owners register items and receive a scannable code, finders report found
items by that code, staff verify reports to publish items on the lost
listing, and owners reclaim items with a matching student ID.
"""

__version__ = "0.1.0"
