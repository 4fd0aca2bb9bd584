"""Exception hierarchy for the intersection controller."""

from __future__ import annotations


class IntersectionError(Exception):
    """Base class for all controller errors."""


class EmptyQueueError(IntersectionError, LookupError):
    """Raised when a vehicle is dequeued from a lane without vehicles.

    The draining loop always checks :meth:`Lane.has_vehicles` first, so seeing
    this error means the controller logic is broken.  It is never retried.
    """


class InvalidDirectionError(IntersectionError, ValueError):
    """Raised for a direction name, index or value outside North/East/South/West."""
