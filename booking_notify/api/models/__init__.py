"""API request/response models."""
