"""tinyconf - editor plugin configuration for one user in one context."""

__version__ = "0.1.0"
