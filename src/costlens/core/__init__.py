"""Core infrastructure: exceptions and configuration."""
