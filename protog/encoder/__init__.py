"""protog encoder -- renders schema descriptions as ``.proto`` documents.

Quick usage::

    from protog.encoder import encode

    data = encode({
        "syntax": "proto3",
        "package": "greet.v1",
        "message": {"HelloRequest": {"name": "string"}},
        "service": {"Greeter": {"SayHello": {"in": "HelloRequest", "out": ""}}},
    })
"""

from protog.encoder.description import describe
from protog.encoder.errors import (
    EncodeError,
    InvalidMessageType,
    InvalidOptionType,
    InvalidPackageType,
    InvalidServiceMethodType,
    InvalidServiceType,
    InvalidSyntaxType,
)
from protog.encoder.models import SchemaDescription
from protog.encoder.renderer import EMPTY_IMPORT, EMPTY_TYPE, Renderer, encode

__all__ = [
    "EMPTY_IMPORT",
    "EMPTY_TYPE",
    "EncodeError",
    "InvalidMessageType",
    "InvalidOptionType",
    "InvalidPackageType",
    "InvalidServiceMethodType",
    "InvalidServiceType",
    "InvalidSyntaxType",
    "Renderer",
    "SchemaDescription",
    "describe",
    "encode",
]
