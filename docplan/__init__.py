"""Documentation build plan generation for development components."""

__version__ = "0.1.0"
