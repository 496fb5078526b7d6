import base64

from Crypto.Cipher import DES3
from Crypto.Random import get_random_bytes
from Crypto.Util.strxor import strxor

from ecboracle.block import BlockCipher

SECRET = base64.b64decode(
    "Um9sbGluJyBpbiBteSA1LjAKV2l0aCBteSByYWctdG9wIGRvd24gc28gbXkgaGFpciBjYW4gYmxvdwpU"
    "aGUgZ2lybGllcyBvbiBzdGFuZGJ5IHdhdmluZyBqdXN0IHRvIHNheSBoaQpEaWQgeW91IHN0b3A/IE5v"
    "LCBJIGp1c3QgZHJvdmUgYnkK"
)


class ToyBlock:
    """Keyed byte permutation: xor with the key, rotate left one byte."""

    def __init__(self, key):
        self.key = bytes(key)
        self.block_size = len(key)

    def encrypt(self, block):
        x = strxor(bytes(block), self.key)
        return x[1:] + x[:1]

    def decrypt(self, block):
        block = bytes(block)
        return strxor(block[-1:] + block[:-1], self.key)


def random_block(block_size):
    """Primitive with the given block size (8: DES3, 16: AES, other: toy)"""
    if block_size == 8:
        return BlockCipher(DES3.adjust_key_parity(get_random_bytes(24)), DES3)
    if block_size == 16:
        return BlockCipher(get_random_bytes(16))
    return ToyBlock(get_random_bytes(block_size))
