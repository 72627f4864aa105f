"""Common validation helpers for user use cases."""


def ensure_valid_email(email: str) -> str:
    """Return a normalized email address or raise ``ValueError``."""

    normalized = email.strip()
    if normalized.count("@") != 1:
        raise ValueError("The email address is not valid")

    local_part, domain = normalized.split("@", 1)
    if not local_part or "." not in domain or domain.startswith("."):
        raise ValueError("The email address is not valid")

    return normalized.lower()
