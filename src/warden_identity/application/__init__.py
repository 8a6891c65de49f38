"""Application layer: use cases orchestrating the identity domain."""
