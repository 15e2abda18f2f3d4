"""Configuration — section models, XDG discovery, settings sources, logging."""
