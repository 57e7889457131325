"""
Field validators shared by request models.

bcrypt only reads the first 72 bytes of a password. Longer passwords are
refused outright instead of being truncated, so two different passwords
can never produce interchangeable hashes.
"""

MAX_PASSWORD_BYTES = 72


def check_password_bytes(value: str) -> str:
    """Pydantic field validator: reject passwords longer than bcrypt accepts."""
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value
