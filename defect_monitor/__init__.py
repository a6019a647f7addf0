"""Manufacturing defect logging and analytics service."""

__version__ = "1.0.0"
