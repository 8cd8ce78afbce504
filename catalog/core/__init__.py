"""Core: settings, constants, and resource wiring."""
