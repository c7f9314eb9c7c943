"""Core configuration, logging and infrastructure setup."""
