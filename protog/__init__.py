"""protog -- a protobuf file generator for the command line."""

from protog.encoder import (
    EncodeError,
    Renderer,
    SchemaDescription,
    describe,
    encode,
)

__version__ = "0.1.0"

__all__ = [
    "EncodeError",
    "Renderer",
    "SchemaDescription",
    "__version__",
    "describe",
    "encode",
]
