"""Priority scoring for product deliverables and their epics."""

__version__ = "0.1.0"
