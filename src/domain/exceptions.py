"""
Domain exceptions - Semantic error types for authentication.

Business outcomes (bad email, weak password, wrong code...) are reported
as AuthResult values, never raised. The exceptions below cover the two
remaining cases: adapter-to-domain signals and operational failures that
a caller must not confuse with a business outcome.
"""


class AuthError(Exception):
    """Base class for authentication domain errors."""

    pass


class EmailAlreadyExists(AuthError):
    """Insert rejected by the store's unique constraint on email."""

    pass


class OperationalError(AuthError):
    """Infrastructure failure - not a business outcome."""

    pass


class StoreUnavailable(OperationalError):
    """Account store could not be reached or failed mid-operation."""

    pass


class NotificationError(OperationalError):
    """Email delivery failed."""

    pass


class ResetCodeDeliveryFailed(OperationalError):
    """
    Reset code was persisted but the notification could not be sent.

    Partial failure: the account update is NOT rolled back, so the stored
    code stays valid until overwritten or consumed.
    """

    reset_code_persisted = True

    def __init__(self, email: str) -> None:
        super().__init__(f"Reset code stored for {email} but email delivery failed")
        self.email = email
