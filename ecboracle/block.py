"""
One-block cipher primitive.

The modes in ecboracle.modes only need an object with:
  - block_size       : int
  - encrypt(block)   : bytes, exactly one block in, one block out
  - decrypt(block)   : bytes

BlockCipher gets that from any pycryptodome block cipher module (AES, DES3,
Blowfish, ...) by driving its raw ECB object one block at a time.
"""

from Crypto.Cipher import AES


class BlockCipher:
    """Single-block view over a pycryptodome cipher module."""

    def __init__(self, key: bytes, factory=AES):
        self._ecb = factory.new(key, factory.MODE_ECB)
        self.block_size = factory.block_size

    def encrypt(self, block) -> bytes:
        return self._ecb.encrypt(bytes(block))

    def decrypt(self, block) -> bytes:
        return self._ecb.decrypt(bytes(block))
