"""Configuration and HTTP helpers."""
