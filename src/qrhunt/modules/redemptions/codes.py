"""Redemption code generation."""

import secrets

from qrhunt.core.constants import REDEMPTION_CODE_ALPHABET, REDEMPTION_CODE_LENGTH


def generate_code(
    length: int = REDEMPTION_CODE_LENGTH,
    alphabet: str = REDEMPTION_CODE_ALPHABET,
) -> str:
    """Generate a redemption code from a CSPRNG.

    Uses rejection sampling over random bytes, so there is no modulo bias.

    Args:
        length: Number of characters
        alphabet: Symbols to draw from

    Returns:
        A code such as ``"K7PX3MQA"``
    """
    size = len(alphabet)
    # Bytes at or above the largest multiple of size are discarded
    limit = 256 - (256 % size)
    chars: list[str] = []
    while len(chars) < length:
        for byte in secrets.token_bytes(length - len(chars)):
            if byte < limit:
                chars.append(alphabet[byte % size])
    return "".join(chars)


def normalize_code(code: str) -> str:
    """Normalize a code typed at the prize desk."""
    return code.strip().upper()
