"""Configuration, logging, error types and storage helpers."""
