"""Team health check: record and list how the team is feeling."""

__version__ = "0.1.0"
