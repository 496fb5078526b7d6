"""
Encryption oracles.

An oracle is any callable bytes -> bytes. The attack only ever calls it;
key, prefix and secret stay hidden inside the oracle object.

  new_ecb_suffix_oracle         AES-ECB(input || secret)
  new_ecb_prefix_suffix_oracle  AES-ECB(prefix || input || secret), random 1..50 byte prefix
  new_ecb_or_cbc_oracle         AES-ECB or AES-CBC(prefix || input || suffix), coin flip
"""

import random
from typing import Callable

from Crypto.Cipher import AES
from Crypto.Random import get_random_bytes
from Crypto.Util.Padding import pad

from .block import BlockCipher
from .errors import QueryBudgetExceeded
from .modes import crypt, new_cbc_encrypter, new_ecb_encrypter

Oracle = Callable[[bytes], bytes]

KEY_SIZE = 16
MAX_PREFIX = 50

_rng = random.SystemRandom()


class EncryptionOracle:
    """
    encrypt(pad(prefix || data || secret)) under a fixed key.

    CBC oracles reuse the same IV on every call so that equal inputs give
    equal outputs.
    """

    def __init__(self, secret: bytes, prefix: bytes = b"", mode: str = "ecb",
                 key: bytes = None, iv: bytes = None, factory=AES):
        if mode not in ("ecb", "cbc"):
            raise ValueError(f"unknown mode {mode!r}")
        self.__block = BlockCipher(key or get_random_bytes(KEY_SIZE), factory)
        self.__prefix = bytes(prefix)
        self.__secret = bytes(secret)
        self.__mode = mode
        self.__iv = iv or get_random_bytes(self.__block.block_size)

    def __call__(self, data: bytes) -> bytes:
        if self.__mode == "ecb":
            mode = new_ecb_encrypter(self.__block)
        else:
            mode = new_cbc_encrypter(self.__block, self.__iv)
        plaintext = pad(self.__prefix + bytes(data) + self.__secret, mode.block_size)
        return crypt(mode, plaintext)

    def __repr__(self):
        return f"<EncryptionOracle {self.__mode}>"


def new_ecb_suffix_oracle(secret: bytes) -> EncryptionOracle:
    return EncryptionOracle(secret)


def new_ecb_prefix_suffix_oracle(secret: bytes) -> EncryptionOracle:
    prefix = get_random_bytes(_rng.randint(1, MAX_PREFIX))
    return EncryptionOracle(secret, prefix=prefix)


def new_ecb_or_cbc_oracle():
    """
    Random 5..10 byte prefix and suffix, ECB or CBC at random.

    Returns:
        (oracle, mode_name) so a mode guess can be checked
    """
    mode = _rng.choice(("ecb", "cbc"))
    prefix = get_random_bytes(_rng.randint(5, 10))
    suffix = get_random_bytes(_rng.randint(5, 10))
    return EncryptionOracle(suffix, prefix=prefix, mode=mode), mode


class QueryBudget:
    """Wrap an oracle and fail once more than max_queries calls were made."""

    def __init__(self, oracle: Oracle, max_queries: int):
        self._oracle = oracle
        self.max_queries = max_queries
        self.queries = 0

    def __call__(self, data: bytes) -> bytes:
        if self.queries >= self.max_queries:
            raise QueryBudgetExceeded(f"query budget of {self.max_queries} exhausted")
        self.queries += 1
        return self._oracle(data)
