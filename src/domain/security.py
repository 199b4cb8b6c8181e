"""
Credential hashing and activation token generation.
"""

import secrets

import bcrypt

DEFAULT_BCRYPT_COST = 12
DEFAULT_TOKEN_LENGTH = 16

# bcrypt only consumes the first 72 bytes of input; newer releases raise
# instead of truncating silently.
BCRYPT_MAX_INPUT_BYTES = 72


def hash_password(password: str, cost: int = DEFAULT_BCRYPT_COST) -> str:
    """
    Hash password using bcrypt.

    The digest is self-describing ($2b$<cost>$<salt><hash>), so a future
    verifier needs no extra state.
    """
    secret = password.encode()[:BCRYPT_MAX_INPUT_BYTES]
    return bcrypt.hashpw(secret, bcrypt.gensalt(rounds=cost)).decode()


def generate_activation_token(length: int = DEFAULT_TOKEN_LENGTH) -> str:
    """
    Generate a cryptographically secure hex activation token.

    Uses the secrets module; length is in hex characters (4 bits each).
    """
    return secrets.token_hex(length // 2)
