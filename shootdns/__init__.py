"""Admission logic for a shoot DNS service extension: config types, state, validation, mutation and error codes."""

__version__ = "0.1.0"

__all__ = ["__version__"]