"""Warden - authentication service.

Exposes the warden_identity credential and token lifecycle over HTTP
(FastAPI) and provides operator commands (Typer).
"""

__version__ = "0.1.0"
