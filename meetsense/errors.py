"""
meetsense/errors.py
Boundary error kinds. The detectors themselves never raise for string
input; these exist for the API and CLI layers.
"""


class MeetSenseError(Exception):
    """Base class for meetsense errors."""


class InvalidInput(MeetSenseError):
    """Request payload is missing a field or has the wrong type (HTTP 400)."""


class InternalFailure(MeetSenseError):
    """Analysis raised unexpectedly (HTTP 500)."""
