"""Exceptions raised by the user domain."""

from uuid import UUID

from warden_identity.exceptions import AuthError, ConflictError, ValidationError


class EmailAlreadyExistsError(ConflictError):
    """Raised when registering an email that already belongs to a user."""

    code = "EMAIL_ALREADY_EXISTS"

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email address is already registered: {email}")


class InvalidEmailError(ValidationError):
    """Raised when an email address is syntactically invalid."""

    code = "INVALID_EMAIL"

    def __init__(self, message: str = "Invalid email address"):
        super().__init__(message)


class UserNotFoundError(AuthError):
    code = "USER_NOT_FOUND"

    def __init__(self, user_id: UUID | str):
        self.user_id = user_id
        super().__init__(f"User not found: {user_id}")
