"""Application layer: configuration value objects and service ports."""
