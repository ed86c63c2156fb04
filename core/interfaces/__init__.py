"""Core interfaces and value types."""
