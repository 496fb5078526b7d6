"""
Cipher block chaining (CBC) mode.

  encrypt: C[i] = E(P[i] ^ C[i-1])      C[-1] = IV
  decrypt: P[i] = D(C[i]) ^ C[i-1]

Both directions keep the last ciphertext block of a call as the chaining
state, so a message can be fed through one instance in several calls.
One instance per stream; the state is not locked.
"""

from Crypto.Util.strxor import strxor

from ..errors import InvalidIVLength
from .base import BlockMode


class _CBC(BlockMode):
    name = "cbc"

    def __init__(self, block, iv):
        if len(iv) != block.block_size:
            raise InvalidIVLength(f"cbc: iv length {len(iv)} != block size {block.block_size}")
        super().__init__(block)
        self._iv = bytes(iv)


class CBCEncrypter(_CBC):

    def _crypt(self, dst, src):
        bs = self.block_size
        prev = self._iv
        for i in range(0, len(src), bs):
            prev = self._b.encrypt(strxor(bytes(src[i:i + bs]), prev))
            dst[i:i + bs] = prev
        self._iv = prev


class CBCDecrypter(_CBC):

    def _crypt(self, dst, src):
        bs = self.block_size

        # Walk backwards: when dst is src, block i is overwritten only after
        # it was used as the XOR input of block i+1.
        prev = len(src) - 2 * bs
        start = len(src) - bs
        end = len(src)

        # next chaining state, saved before it can be overwritten
        last = bytes(src[start:end])

        while start > 0:
            plain = strxor(self._b.decrypt(src[start:end]), bytes(src[prev:start]))
            dst[start:end] = plain
            end -= bs
            start -= bs
            prev -= bs

        dst[start:end] = strxor(self._b.decrypt(src[start:end]), self._iv)
        self._iv = last


def new_cbc_encrypter(block, iv: bytes) -> CBCEncrypter:
    return CBCEncrypter(block, iv)


def new_cbc_decrypter(block, iv: bytes) -> CBCDecrypter:
    return CBCDecrypter(block, iv)
