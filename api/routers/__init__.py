"""API routers, mounted under /api by create_app."""
