"""Convert a loose schema mapping into a typed ``SchemaDescription``.

The loose form is what command-line adapters and callers naturally build::

    {
        "syntax": "proto3",
        "package": "greet.v1",
        "option": [["go_package", "greet/v1"]],
        "message": {"HelloRequest": {"name": "string"}},
        "service": {"Greeter": {"SayHello": {"in": "HelloRequest", "out": ""}}},
    }

Sections are checked in document order (syntax, package, option, message,
service) and the first malformed payload raises the matching
:class:`~protog.encoder.errors.EncodeError` subclass.  Unknown keys are
ignored.  Dict insertion order becomes declaration order.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Callable

from pydantic import ValidationError

from .errors import (
    InvalidMessageType,
    InvalidOptionType,
    InvalidPackageType,
    InvalidServiceMethodType,
    InvalidServiceType,
    InvalidSyntaxType,
)
from .models import (
    Message,
    MessageField,
    MessageMap,
    Method,
    Option,
    OptionList,
    PackageValue,
    STREAM_SENTINEL,
    SchemaDescription,
    Service,
    ServiceMap,
    SyntaxValue,
)


def describe(data: Mapping[str, Any] | SchemaDescription) -> SchemaDescription:
    """Validate *data* section by section and return the typed description.

    A ``SchemaDescription`` is returned unchanged.

    Raises:
        EncodeError: The first section whose payload has the wrong shape.
        TypeError: If *data* is not a mapping at all.
    """
    if isinstance(data, SchemaDescription):
        return data
    if not isinstance(data, Mapping):
        raise TypeError(
            f"schema description must be a mapping, got {type(data).__name__}"
        )

    sections: dict[str, Any] = {}
    for key, parse in _SECTION_PARSERS:
        if key in data:
            sections[key] = parse(data[key])
    return SchemaDescription(**sections)


# ---------------------------------------------------------------------------
# Section parsers
# ---------------------------------------------------------------------------

def _parse_syntax(value: Any) -> SyntaxValue:
    if isinstance(value, SyntaxValue):
        return value
    if not isinstance(value, str):
        raise InvalidSyntaxType(f"expected a string, got {_type_name(value)}")
    return SyntaxValue(value=value)


def _parse_package(value: Any) -> PackageValue:
    if isinstance(value, PackageValue):
        return value
    if not isinstance(value, str):
        raise InvalidPackageType(f"expected a string, got {_type_name(value)}")
    return PackageValue(value=value)


def _parse_options(value: Any) -> OptionList:
    """Accept a sequence of ``(name, value)`` string pairs.

    Pairs shorter than two elements are dropped; extra elements are ignored.
    """
    if isinstance(value, OptionList):
        return value
    if not _is_sequence(value):
        raise InvalidOptionType(
            f"expected a sequence of (name, value) pairs, got {_type_name(value)}"
        )

    options: list[Option] = []
    for pair in value:
        if isinstance(pair, Option):
            options.append(pair)
            continue
        if not _is_sequence(pair) or not all(isinstance(item, str) for item in pair):
            raise InvalidOptionType(f"expected a pair of strings, got {pair!r}")
        if len(pair) < 2:
            continue
        options.append(Option(name=pair[0], value=pair[1]))
    return OptionList(options=options)


def _parse_messages(value: Any) -> MessageMap:
    if isinstance(value, MessageMap):
        return value
    if not isinstance(value, Mapping):
        raise InvalidMessageType(
            f"expected a mapping of message name to fields, got {_type_name(value)}"
        )

    messages: list[Message] = []
    for name, fields in value.items():
        if not isinstance(name, str):
            raise InvalidMessageType(f"message name must be a string, got {name!r}")
        try:
            messages.append(Message(name=name, fields=_parse_fields(name, fields)))
        except ValidationError as exc:
            raise InvalidMessageType(f"message {name!r}: {_first_error(exc)}") from exc
    return MessageMap(messages=messages)


def _parse_fields(message: str, fields: Any) -> list[MessageField]:
    """Fields come as ``{name: type}`` or as an ordered ``[(name, type), ...]``."""
    if isinstance(fields, Mapping):
        pairs = list(fields.items())
    elif _is_sequence(fields) and all(_is_sequence(p) and len(p) == 2 for p in fields):
        pairs = [tuple(p) for p in fields]
    else:
        raise InvalidMessageType(
            f"message {message!r}: expected a mapping of field name to type, "
            f"got {_type_name(fields)}"
        )

    result: list[MessageField] = []
    for field_name, field_type in pairs:
        if not isinstance(field_name, str) or not isinstance(field_type, str):
            raise InvalidMessageType(
                f"message {message!r}: field {field_name!r} must map a string "
                f"name to a string type"
            )
        result.append(MessageField(name=field_name, type=field_type))
    return result


def _parse_services(value: Any) -> ServiceMap:
    if isinstance(value, ServiceMap):
        return value
    if not isinstance(value, Mapping):
        raise InvalidServiceType(
            f"expected a mapping of service name to methods, got {_type_name(value)}"
        )

    services: list[Service] = []
    for name, methods in value.items():
        if not isinstance(name, str):
            raise InvalidServiceType(f"service name must be a string, got {name!r}")
        if not isinstance(methods, Mapping):
            raise InvalidServiceMethodType(
                f"service {name!r}: expected a mapping of method name to "
                f"descriptor, got {_type_name(methods)}"
            )
        services.append(
            Service(
                name=name,
                methods=[
                    _parse_method(name, method_name, descriptor)
                    for method_name, descriptor in methods.items()
                ],
            )
        )
    return ServiceMap(services=services)


def _parse_method(service: str, name: Any, descriptor: Any) -> Method:
    """A missing ``in`` or ``out`` key is the same as an empty one.

    A ``Method`` instance must carry the name it is registered under.
    """
    if isinstance(descriptor, Method):
        if descriptor.name != name:
            raise InvalidServiceMethodType(
                f"service {service!r}: method {name!r} is registered with a "
                f"descriptor named {descriptor.name!r}"
            )
        return descriptor
    if not isinstance(name, str) or not isinstance(descriptor, Mapping):
        raise InvalidServiceMethodType(
            f"service {service!r}: method {name!r} must map to an in/out descriptor"
        )

    request = descriptor.get("in", "")
    response = descriptor.get("out", "")
    if not isinstance(request, str) or not isinstance(response, str):
        raise InvalidServiceMethodType(
            f"service {service!r}: method {name!r} in/out types must be strings"
        )
    for token in (request, response):
        if token.startswith(STREAM_SENTINEL) and not token[len(STREAM_SENTINEL):].strip():
            raise InvalidServiceMethodType(
                f"service {service!r}: method {name!r} has a stream marker without a type"
            )
    return Method(name=name, input=request, output=response)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _type_name(value: Any) -> str:
    return type(value).__name__


def _first_error(exc: ValidationError) -> str:
    return exc.errors()[0]["msg"]


_SECTION_PARSERS: tuple[tuple[str, Callable[[Any], Any]], ...] = (
    ("syntax", _parse_syntax),
    ("package", _parse_package),
    ("option", _parse_options),
    ("message", _parse_messages),
    ("service", _parse_services),
)
