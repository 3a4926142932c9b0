"""Shared utilities for the VIOP matching modules."""
