"""Domain errors raised by the auth core and converted to responses at the API boundary."""


class RolegateError(Exception):
    """Base for errors that map to an HTTP response.

    body_key is the JSON key the message is returned under ("message" or "error").
    """

    status_code = 500
    body_key = "message"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AuthValidationError(RolegateError):
    """Registration input is malformed (username, password or role)."""

    status_code = 400
    body_key = "error"


class DuplicateUsernameError(RolegateError):
    """A user with this username already exists."""

    status_code = 400
    body_key = "error"

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__(f"Username '{username}' is already taken")


class InvalidCredentialsError(RolegateError):
    """Login failed. Deliberately the same for unknown user and wrong password."""

    status_code = 401

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class UnauthenticatedError(RolegateError):
    """Missing, malformed, expired or badly signed bearer token."""

    status_code = 401


class ForbiddenError(RolegateError):
    """Valid token whose role does not satisfy the route's requirement."""

    status_code = 403


class StoreUnavailableError(RolegateError):
    """The credential store could not complete the operation."""

    status_code = 500


class TokenError(Exception):
    """Base for token verification failures."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TokenInvalidError(TokenError):
    """Signature mismatch or otherwise rejected token."""


class TokenMalformedError(TokenInvalidError):
    """Token cannot be decoded or lacks required claims."""


class TokenExpiredError(TokenError):
    """Token is past its exp claim."""
