"""IAM domain layer."""
