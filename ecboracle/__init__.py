"""
ECB byte-at-a-time oracle attack.

Block cipher modes (ECB, CBC) over a one-block primitive, and a
chosen-plaintext attack recovering a secret appended to attacker input.
"""

__version__ = "0.1.0"
