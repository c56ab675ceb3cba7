"""FastAPI dependency providers for IAM bounded context."""
