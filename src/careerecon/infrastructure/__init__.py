"""Infrastructure layer: configuration, caching, providers and wiring."""
