"""Core infrastructure: errors, XDG paths and configuration."""
