"""Command-line mini-grammar for messages, services and options.

Turns the compact tokens accepted on the command line into the loose
section mapping understood by :func:`protog.encoder.describe`::

    HelloRequest[name:string,id:int64]   -> {"HelloRequest": {"name": "string", "id": "int64"}}
    Greeter[SayHello:HelloRequest:+Chunk] -> {"Greeter": {"SayHello": {"in": "HelloRequest", "out": "+Chunk"}}}
    go_package:greet/v1                  -> ("go_package", "greet/v1")

Type tokens are passed through untouched; the renderer resolves streaming
(``+``) and empty types.
"""

from __future__ import annotations

from typing import Any


class GrammarError(ValueError):
    """Raised when a command-line definition cannot be parsed."""


def parse_message(token: str) -> tuple[str, dict[str, str]]:
    """Parse ``Name[field:type,...]`` into ``(name, {field: type})``."""
    name, body = _split_definition(token, "message")
    fields: dict[str, str] = {}
    for item in body.split(","):
        parts = item.split(":")
        if len(parts) != 2:
            raise GrammarError(f"error parsing message fields: {item!r} in {token!r}")
        fields[parts[0]] = parts[1]
    return name, fields


def parse_service(token: str) -> tuple[str, dict[str, dict[str, str]]]:
    """Parse ``Name[method:in:out,...]`` into ``(name, {method: {in, out}})``.

    ``in`` and ``out`` are optional; a missing one is left empty.
    """
    name, body = _split_definition(token, "service")
    methods: dict[str, dict[str, str]] = {}
    for item in body.split(","):
        parts = item.split(":")
        method = parts[0]
        if not method.strip():
            raise GrammarError(f"error parsing service methods: {item!r} in {token!r}")
        methods[method] = {
            "in": parts[1] if len(parts) > 1 else "",
            "out": parts[2] if len(parts) > 2 else "",
        }
    return name, methods


def parse_option(token: str) -> tuple[str, str]:
    """Parse ``name:value``.  Only the first ``:`` separates."""
    name, sep, value = token.partition(":")
    if not sep or not name:
        raise GrammarError(f"error parsing option: {token!r} (expected name:value)")
    return name, value


def build_description(
    package: str,
    syntax: str = "proto3",
    messages: list[str] | None = None,
    services: list[str] | None = None,
    options: list[str] | None = None,
) -> dict[str, Any]:
    """Assemble a loose schema mapping from raw command-line tokens.

    Sections with no tokens are left out.  Redefining a message or service
    name replaces the earlier definition.
    """
    description: dict[str, Any] = {"syntax": syntax, "package": package}

    if options:
        description["option"] = [list(parse_option(token)) for token in options]

    msgs: dict[str, dict[str, str]] = {}
    for token in messages or []:
        name, fields = parse_message(token)
        msgs[name] = fields
    if msgs:
        description["message"] = msgs

    svcs: dict[str, dict[str, dict[str, str]]] = {}
    for token in services or []:
        name, methods = parse_service(token)
        svcs[name] = methods
    if svcs:
        description["service"] = svcs

    return description


def _split_definition(token: str, kind: str) -> tuple[str, str]:
    parts = token.split("[")
    if len(parts) != 2 or not parts[0]:
        raise GrammarError(f"error parsing {kind}: {token!r} (expected Name[...])")
    return parts[0], parts[1].replace("]", "")
