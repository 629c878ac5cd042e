"""Password encryption compatible with the eportal login page script.

The portal encrypts ``password + ">" + mac`` in the browser with a textbook
RSA variant (no padding, no randomness) before posting it. The gateway only
accepts ciphertext produced exactly the same way, so every step below,
including the block sizing, mirrors that script.
"""
import logging

from .constants import PUBLIC_EXPONENT, PUBLIC_MODULUS
from .errors import CipherError, ConstructionFailed

logger = logging.getLogger(__name__)


class PasswordCipher:
    def __init__(self, exponent_hex: str = PUBLIC_EXPONENT, modulus_hex: str = PUBLIC_MODULUS) -> None:
        try:
            self.exponent = int(exponent_hex, 16)
            self.modulus = int(modulus_hex, 16)
        except (TypeError, ValueError) as exc:
            raise ConstructionFailed(f"invalid public key: {exc}") from exc
        if self.modulus <= 1 or self.exponent <= 0:
            raise ConstructionFailed("public key parameters out of range")

        modulus_bytes = (self.modulus.bit_length() + 7) // 8
        # One byte short of the modulus size, as the page script computes it.
        self.chunk_size = 2 * (modulus_bytes - 1)
        if self.chunk_size <= 0:
            raise ConstructionFailed("modulus too small")

    def encrypt(self, secret: str) -> str:
        try:
            data = secret[::-1].encode("latin-1")
        except UnicodeEncodeError as exc:
            raise CipherError("only single-byte characters can be encrypted") from exc

        remainder = len(data) % self.chunk_size
        if remainder:
            data += b"\x00" * (self.chunk_size - remainder)

        blocks = []
        for offset in range(0, len(data), self.chunk_size):
            chunk = data[offset:offset + self.chunk_size]
            # Each pair (b0, b1) is the digit b0 | b1 << 8 at position 16 * j,
            # which is the chunk read as a little-endian integer.
            block = int.from_bytes(chunk, "little")
            blocks.append(format(pow(block, self.exponent, self.modulus), "x"))

        logger.debug("Encrypted credential into %d block(s)", len(blocks))
        return " ".join(blocks)
