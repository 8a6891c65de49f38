"""Value objects for the user domain having identity concerns only."""

from warden_identity.domain.user.value_objects.email import Email
from warden_identity.domain.user.value_objects.role import DEFAULT_ROLE_NAME, Role

__all__ = [
    "DEFAULT_ROLE_NAME",
    "Email",
    "Role",
]
