"""
Byte-at-a-time ECB decryption.

The oracle returns ECB(prefix || input || secret || pad). Choose a filler so
that the next unknown secret byte is the last byte of a block:

    |prefix..filler  recovered  ?|  <- one block, only '?' unknown

Ask the oracle for ECB(prefix || filler || secret ...) once, then try all
256 values of '?' as input; the one giving the same leading blocks is the
next secret byte. Once the secret is exhausted we are guessing pad bytes,
and the round after the first pad byte matches nothing.

Usage:
    secret = recover_secret(oracle)
    secret = recover_secret_with_prefix(oracle)
"""

import logging

from ..errors import NotECBOracle
from .probe import discover_block_size, discover_prefix_length, is_ecb_oracle

log = logging.getLogger(__name__)


def strip_padding(data: bytes) -> bytes:
    """Drop the PKCS#7 tail picked up at the end of the recovery"""
    if not data:
        return data
    n = data[-1]
    if n == 0 or n > len(data):
        raise ValueError(f"no padding length at the end of the recovered bytes ({n:#04x})")
    return data[:-n]


def recover_bytes(oracle, block_size: int, prefix_len: int = 0) -> bytes:
    """
    Recover everything after our input, padding included.

    Args:
        oracle: ECB encryption oracle
        block_size: cipher block size
        prefix_len: bytes the oracle puts before our input

    Returns:
        secret followed by the pad bytes that matched
    """
    recovered = bytearray()

    while True:
        filler = bytes(block_size - (prefix_len + len(recovered)) % block_size - 1)

        # ECB(prefix || filler || secret || pad)
        want = oracle(filler)

        guess = filler + recovered
        bound = prefix_len + len(guess) + 1

        for b in range(256):
            # ECB(prefix || filler || recovered || b || secret || pad)
            output = oracle(guess + bytes([b]))
            if output[:bound] == want[:bound]:
                recovered.append(b)
                log.debug("byte %d: %#04x", len(recovered) - 1, b)
                break
        else:
            # nothing matched: past the secret and its first pad byte
            break

    return bytes(recovered)


def recover_secret(oracle) -> bytes:
    """
    Recover the secret from an oracle computing ECB(input || secret || pad).

    Raises:
        NotECBOracle: the oracle does not leak repeated blocks
    """
    bs = discover_block_size(oracle)
    if not is_ecb_oracle(oracle, bs):
        raise NotECBOracle("oracle does not use ECB")
    log.info("block size: %d", bs)

    secret = strip_padding(recover_bytes(oracle, bs))
    log.info("recovered %d secret bytes", len(secret))
    return secret


def recover_secret_with_prefix(oracle) -> bytes:
    """
    Recover the secret from an oracle computing ECB(prefix || input || secret || pad)
    for an unknown fixed prefix.

    Raises:
        NotECBOracle: the oracle does not leak repeated blocks
        MagicBlockNotFound: the prefix length could not be found
    """
    bs = discover_block_size(oracle)
    if not is_ecb_oracle(oracle, bs):
        raise NotECBOracle("oracle does not use ECB")
    log.info("block size: %d", bs)

    prefix_len = discover_prefix_length(oracle, bs)

    secret = strip_padding(recover_bytes(oracle, bs, prefix_len))
    log.info("recovered %d secret bytes", len(secret))
    return secret
