from .byte_at_a_time import recover_bytes, recover_secret, recover_secret_with_prefix, strip_padding
from .probe import discover_block_size, discover_prefix_length, find_magic_block, is_ecb_oracle
