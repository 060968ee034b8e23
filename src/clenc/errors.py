class CLError(Exception):
    """Base exception for CL encryption errors."""

    pass


class SetupFailure(CLError):
    """Raised when no composite-order group can be built for the requested sizes."""

    pass


class RandomnessFailure(CLError):
    """Raised when the randomness source fails during a draw."""

    pass


class InvalidCiphertextShape(CLError, ValueError):
    """Raised when a ciphertext is missing a component or is not a Ciphertext."""

    pass


class WrongRandomnessError(CLError, ValueError):
    """Raised when an explicitly supplied randomizer is zero modulo N."""

    pass
