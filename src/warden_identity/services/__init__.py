"""Identity services - access token signing and password hashing."""

from warden_identity.services.password_service import PasswordHashingService
from warden_identity.services.token_signer import TokenSigner

__all__ = [
    "PasswordHashingService",
    "TokenSigner",
]
