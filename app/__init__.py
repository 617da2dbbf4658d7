"""Places gateway application package."""
