"""Warden HTTP API (FastAPI)."""
