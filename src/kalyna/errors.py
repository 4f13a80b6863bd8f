"""Exceptions raised by the DSTU 7624 engine.

Each one also derives from the built-in type callers would naturally
catch (ValueError for bad arguments, RuntimeError for misuse).
"""


class KalynaError(Exception):
    """Base class for all engine errors."""


class UnsupportedBlockSizeError(KalynaError, ValueError):
    """Block size is not 128, 256 or 512 bits."""


class UnsupportedKeySizeError(KalynaError, ValueError):
    """Key size is not allowed, on its own or for the engine's block size."""


class InvalidKeyError(KalynaError, ValueError):
    """Key object is not usable as key material."""


class DataLengthError(KalynaError, ValueError):
    """Input buffer holds fewer bytes than one block."""


class OutputLengthError(DataLengthError):
    """Output buffer has less room than one block."""


class EngineNotInitialisedError(KalynaError, RuntimeError):
    """process_block() called before init()."""
