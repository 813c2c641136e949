"""Read-only strategic intelligence for Civilization VI saves and logs."""

__version__ = "0.1.0"
