"""Per-type line and byte counts for JSON-lines log files."""

__version__ = "0.1.0"
