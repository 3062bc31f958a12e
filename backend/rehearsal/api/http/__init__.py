"""FastAPI routers under /api/v1."""
