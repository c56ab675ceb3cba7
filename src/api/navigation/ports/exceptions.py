"""Exceptions for the navigation bounded context.

These exceptions represent errors raised by adapters behind the navigation
ports. They are caught and handled by the application layer.
"""


class MenuStoreUnavailableError(Exception):
    """Raised when the menu store cannot be reached.

    Wraps transport and driver failures so the application layer can tell
    "could not determine menus" apart from "no menus".
    """

    pass


class TenantAccessDeniedError(Exception):
    """Raised when a user selects a tenant they are not a member of.

    Super admins bypass tenant scoping and never trigger this error.
    """

    pass


class DurableStoreError(Exception):
    """Raised when the durable client record cannot be written."""

    pass
