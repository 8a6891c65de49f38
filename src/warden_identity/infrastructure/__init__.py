"""Infrastructure adapters for warden_identity."""
