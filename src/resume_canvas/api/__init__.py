"""FastAPI persistence API for canvas projects and image uploads."""
