"""Contract logic, message and state types, and an in-memory contract runtime."""

__version__ = "0.1.0"