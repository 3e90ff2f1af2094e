"""Domain layer: value objects, errors and ports."""
