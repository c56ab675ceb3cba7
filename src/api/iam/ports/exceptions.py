"""Domain exceptions for IAM bounded context.

These exceptions represent domain-level errors that can occur during
repository operations. They should be caught and handled by the
application layer.
"""


class UnknownUserError(Exception):
    """Raised when the acting user does not exist or is inactive.

    The presentation layer maps this to 401 without revealing whether the
    user exists.
    """

    pass


class MigrationError(Exception):
    """Raised when the legacy membership migration cannot complete.

    The surrounding transaction is rolled back, so a failed migration
    leaves no partial assignments behind.
    """

    pass


class UnauthorizedError(Exception):
    """Raised when a user asks for a tenant they hold no assignment in."""

    pass
