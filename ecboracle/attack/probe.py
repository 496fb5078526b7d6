"""
Oracle probing: block size, ECB detection, prefix length.

Principle:
  - Block size: the ciphertext length only moves in block steps, so grow
    the input one byte at a time until it jumps; the jump is the block size.
  - ECB: 3 blocks of identical input always contain 2 aligned identical
    plaintext blocks, which ECB turns into 2 identical ciphertext blocks.
  - Prefix length ("magic block"): repeat a random block R many times.
    Past the unknown prefix p, every block boundary holds the same rotation
    R[d:] + R[:d] of R (d = -p % bs), which encrypts to the most common
    block M of the output. Then send R followed by its first i bytes: once
    i == d the block starting at p + d is that rotation again, so M shows
    up at offset j = p + i and p = j - i.
"""

import logging
from collections import Counter

from Crypto.Random import get_random_bytes

from ..errors import BlockSizeNotFound, MagicBlockNotFound
from ..modes.ecb import is_ecb_ciphertext

log = logging.getLogger(__name__)

MAX_PROBE_LENGTH = 1024
PREFIX_PROBE_REPEAT = 100


def discover_block_size(oracle, max_length: int = MAX_PROBE_LENGTH) -> int:
    """Detects the block size by observing ciphertext length changes"""
    data = bytearray(1)
    start = len(oracle(bytes(data)))

    n = start
    while n == start:
        if len(data) >= max_length:
            raise BlockSizeNotFound(f"ciphertext length stuck at {start} up to {max_length} input bytes")
        data.append(0)
        n = len(oracle(bytes(data)))

    log.debug("ciphertext length %d -> %d after %d input bytes", start, n, len(data))
    return n - start


def is_ecb_oracle(oracle, block_size: int = None) -> bool:
    """True if the oracle encrypts with ECB (or another chainless mode)"""
    bs = block_size or discover_block_size(oracle)
    if bs == 1:
        return False

    ct = oracle(bytes(3 * bs))
    result = is_ecb_ciphertext(ct, bs)
    log.debug("block size %d, ecb: %s", bs, result)
    return result


def _blocks(data: bytes, bs: int):
    return [data[i:i + bs] for i in range(0, len(data), bs)]


def find_magic_block(oracle, reference: bytes, repeat: int = PREFIX_PROBE_REPEAT) -> bytes:
    """Most frequent ciphertext block when reference is repeated `repeat` times"""
    output = oracle(reference * repeat)
    histogram = Counter(_blocks(output, len(reference)))
    magic, freq = histogram.most_common(1)[0]
    log.debug("magic block %s seen %d times", magic.hex(), freq)
    return magic


def discover_prefix_length(oracle, block_size: int, repeat: int = PREFIX_PROBE_REPEAT) -> int:
    """
    Length of the fixed prefix the oracle puts before our input.

    Args:
        oracle: ECB encryption oracle
        block_size: from discover_block_size
        repeat: copies of the reference block used to find the magic block

    Raises:
        MagicBlockNotFound: no extra length brought the magic block back
            (prefix too long for `repeat`, or not ECB)
    """
    reference = get_random_bytes(block_size)
    magic = find_magic_block(oracle, reference, repeat)

    # only i == -p % bs completes the rotation seen in the repeated query
    for i in range(block_size):
        output = oracle(reference + reference[:i])
        for j in range(0, len(output), block_size):
            if output[j:j + block_size] == magic:
                log.info("prefix length: %d (magic block at %d, %d extra bytes)", j - i, j, i)
                return j - i

    raise MagicBlockNotFound("magic block never appeared")
