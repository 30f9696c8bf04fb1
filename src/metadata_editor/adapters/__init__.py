"""Adapters – MongoDB storage and the FastAPI HTTP layer."""
