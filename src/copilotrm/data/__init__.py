"""Data layer - domain schemas and context-assembly repositories."""
