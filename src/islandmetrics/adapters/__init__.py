"""Adapters binding the core ports to asyncio, FastAPI and browser timing."""
