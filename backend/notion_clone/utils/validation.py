from __future__ import annotations

# bcrypt ignores everything past 72 bytes
MAX_PASSWORD_BYTES = 72

WEAK_PASSWORDS = {"password", "123456", "12345678", "qwerty", "admin", "test", "password123"}


def validate_password_strength(password: str) -> tuple[bool, str | None]:
    """Validate password strength."""
    if len(password) < 8:
        return False, "Password must be at least 8 characters long"
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return False, f"Password must be at most {MAX_PASSWORD_BYTES} bytes long"
    if password.lower() in WEAK_PASSWORDS:
        return False, "Password is too weak. Please choose a stronger password."
    return True, None
