"""FastAPI application package for TaskHub."""
