"""
Priority Scoring - Exceptions
"""


class ScoringError(Exception):
    """Base class for errors raised by the priority scoring package."""


class BackupFormatError(ScoringError, ValueError):
    """Import data is not a list of container-shaped records."""
