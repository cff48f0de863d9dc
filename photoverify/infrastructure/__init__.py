"""Infrastructure adapters and framework wiring."""
