"""FastAPI application for the property listing REST API."""
