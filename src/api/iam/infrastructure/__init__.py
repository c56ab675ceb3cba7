"""IAM infrastructure - ORM models and repositories."""
