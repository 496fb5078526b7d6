"""Exceptions raised by the mode engine and the attack."""


class ModeError(ValueError):
    """Caller broke the crypt_blocks / constructor contract."""


class InvalidInputLength(ModeError):
    pass


class BufferTooSmall(ModeError):
    pass


class InvalidOverlap(ModeError):
    pass


class InvalidIVLength(ModeError):
    pass


class AttackError(RuntimeError):
    """A precondition of the attack does not hold for this oracle."""


class BlockSizeNotFound(AttackError):
    pass


class MagicBlockNotFound(AttackError):
    pass


class NotECBOracle(AttackError):
    pass


class QueryBudgetExceeded(AttackError):
    pass
