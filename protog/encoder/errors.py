"""Exceptions raised while turning a schema description into a document."""

from __future__ import annotations


class EncodeError(ValueError):
    """Base class for every rendering failure.

    Attributes:
        section: The description key whose payload was rejected.
    """

    section = ""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"{self.section}: {message}")


class InvalidSyntaxType(EncodeError):
    """Raised when the ``syntax`` payload is not a string."""

    section = "syntax"


class InvalidPackageType(EncodeError):
    """Raised when the ``package`` payload is not a string."""

    section = "package"


class InvalidOptionType(EncodeError):
    """Raised when the ``option`` payload is not a sequence of string pairs."""

    section = "option"


class InvalidMessageType(EncodeError):
    """Raised when the ``message`` payload or one of its field maps is malformed."""

    section = "message"


class InvalidServiceType(EncodeError):
    """Raised when the ``service`` payload is not a mapping of method maps."""

    section = "service"


class InvalidServiceMethodType(EncodeError):
    """Raised when a single method descriptor is malformed."""

    section = "service"
