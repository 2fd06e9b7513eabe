"""Application configuration models and loader."""
