"""Configuration constants (environment overridable)."""
