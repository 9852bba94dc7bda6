"""Utilities for the lifecycle bot."""
