"""Document schemas and localized defaults."""
