"""Shared utilities, middleware and response models."""
