"""Application layer - Use cases, services and ports."""
