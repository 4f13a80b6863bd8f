"""DSTU 7624:2014 (Kalyna) block cipher."""

__version__ = "0.1.0"

from .errors import (
    KalynaError,
    UnsupportedBlockSizeError,
    UnsupportedKeySizeError,
    InvalidKeyError,
    DataLengthError,
    OutputLengthError,
    EngineNotInitialisedError,
)
from .geometry import Geometry, ALLOWED_GEOMETRIES
from .interfaces import BlockCipher
from .engine import Dstu7624Engine, encrypt_block, decrypt_block
from .key_schedule import expand_key
from .trace import TraceRecorder

__all__ = [
    "KalynaError",
    "UnsupportedBlockSizeError",
    "UnsupportedKeySizeError",
    "InvalidKeyError",
    "DataLengthError",
    "OutputLengthError",
    "EngineNotInitialisedError",
    "Geometry",
    "ALLOWED_GEOMETRIES",
    "BlockCipher",
    "Dstu7624Engine",
    "encrypt_block",
    "decrypt_block",
    "expand_key",
    "TraceRecorder",
]
