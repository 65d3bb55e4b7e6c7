"""Validators."""

import re
from typing import List


def validate_password_strength(password: str) -> tuple[bool, List[str]]:
    """Validate password strength."""
    errors = []

    if len(password) < 8:
        errors.append("Password must be at least 8 characters long")

    if not re.search(r'[A-Z]', password):
        errors.append("Password must contain at least one uppercase letter")

    if not re.search(r'[a-z]', password):
        errors.append("Password must contain at least one lowercase letter")

    if not re.search(r'[\d\W]', password):
        errors.append("Password must contain at least one digit or special character")

    return len(errors) == 0, errors


def is_numeric_username(username: str) -> bool:
    """Student accounts in the university directory are numeric student codes."""
    return username.isdigit()
