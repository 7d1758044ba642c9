"""Core types and constants shared across the courtside blueprints."""
