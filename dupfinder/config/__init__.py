"""Configuration, logging setup and exception hierarchy for dupfinder."""
