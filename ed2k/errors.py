class Ed2kError(Exception):
    """Base class for ed2k-specific errors."""


# Usage contract
class HashFinalizedError(Ed2kError, RuntimeError):
    """Raised when a finalized session is updated, finalized or copied."""


class UnknownVariantError(Ed2kError, ValueError):
    pass
