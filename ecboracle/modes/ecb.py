"""
Electronic codebook (ECB) mode.

Every block is encrypted on its own:  C[i] = E(P[i])
Equal plaintext blocks give equal ciphertext blocks, which is what
is_ecb_ciphertext looks for and what the byte-at-a-time attack exploits.
"""

from .base import BlockMode


class ECBEncrypter(BlockMode):
    name = "ecb"

    def _crypt(self, dst, src):
        bs = self.block_size
        for i in range(0, len(src), bs):
            dst[i:i + bs] = self._b.encrypt(src[i:i + bs])


class ECBDecrypter(BlockMode):
    name = "ecb"

    def _crypt(self, dst, src):
        bs = self.block_size
        for i in range(0, len(src), bs):
            dst[i:i + bs] = self._b.decrypt(src[i:i + bs])


def new_ecb_encrypter(block) -> ECBEncrypter:
    return ECBEncrypter(block)


def new_ecb_decrypter(block) -> ECBDecrypter:
    return ECBDecrypter(block)


def is_ecb_ciphertext(ct: bytes, block_size: int = 16) -> bool:
    """True if some block_size-byte block shows up more than once."""
    seen = set()
    for i in range(0, len(ct) - block_size + 1, block_size):
        block = bytes(ct[i:i + block_size])
        if block in seen:
            return True
        seen.add(block)
    return False


def find_ecb_ciphertext(cts, block_size: int = 16):
    """Return the first ciphertext likely to be ECB-encrypted, or None."""
    for ct in cts:
        if is_ecb_ciphertext(ct, block_size):
            return ct
    return None
