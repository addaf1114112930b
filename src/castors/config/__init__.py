"""Configuration layer — pydantic models, TOML discovery, settings and logging."""
