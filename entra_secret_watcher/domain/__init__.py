"""Domain layer - Credentials, scan results and classification."""
