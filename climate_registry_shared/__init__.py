"""Schemas shared between the registry core and its callers."""
