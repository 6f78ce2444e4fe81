"""Client library for IBM SOAR: REST session checks and function-call data structures."""

__version__ = "0.1.0"