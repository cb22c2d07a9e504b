"""Activity stats report generator for Elevate CSV exports."""

__version__ = "0.1.0"
