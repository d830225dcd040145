import secrets
import string

# URL-safe alphabet: digits, both letter cases, '_' and '-'
ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase + "_-"
SHORT_CODE_LENGTH = 9


def generate_short_code() -> str:
    """Generate a cryptographically secure random 9-character URL-safe code."""
    return ''.join(secrets.choice(ALPHABET) for _ in range(SHORT_CODE_LENGTH))
