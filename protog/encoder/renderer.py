"""Render a schema description as ``.proto`` source text.

The document is built as a fixed row of section slots, one per section kind,
in canonical order::

    syntax, package, option, import, message, service

Each section writer turns its typed payload into a self-contained text block.
Writers may request imports (for example the service writer asks for
``google/protobuf/empty.proto`` when a method has no request or response
type); requested imports land in the import slot, which sits ahead of the
message and service slots.  The assembler then joins the non-empty slots
with one blank line between neighbours.

All state lives in local variables of a single render call, so a
``Renderer`` may be shared freely.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .description import describe
from .models import (
    Message,
    MessageMap,
    OptionList,
    PackageValue,
    STREAM_SENTINEL,
    SchemaDescription,
    Service,
    ServiceMap,
    SyntaxValue,
)


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------

EMPTY_TYPE = "google.protobuf.Empty"
EMPTY_IMPORT = "google/protobuf/empty.proto"
STREAM_KEYWORD = "stream"

SLOT_ORDER: tuple[str, ...] = ("syntax", "package", "option", "import", "message", "service")


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class _Layout:
    """Whitespace policy for one render."""

    indent: bool = True
    compact: bool = False

    @property
    def newline(self) -> str:
        return "" if self.compact else "\n"

    @property
    def tab(self) -> str:
        return "\t" if self.indent and not self.compact else ""

    @property
    def separator(self) -> str:
        """Blank line between two blocks."""
        return self.newline * 2


# ---------------------------------------------------------------------------
# Renderer
# ---------------------------------------------------------------------------


class Renderer:
    """Turns a schema description into ``.proto`` document bytes.

    Args:
        indent: Tab-indent field and method lines (ignored in compact mode).
        compact: Drop every line break and indentation tab.
    """

    def __init__(self, indent: bool = True, compact: bool = False) -> None:
        self.indent = indent
        self.compact = compact

    def render(self, data: Mapping[str, Any] | SchemaDescription) -> bytes:
        """Render *data* and return the UTF-8 encoded document.

        *data* is either a loose section mapping or a ``SchemaDescription``.
        Nothing is returned if any section is malformed: the first
        :class:`~protog.encoder.errors.EncodeError` propagates to the caller.
        """
        return self.render_text(data).encode("utf-8")

    def render_text(self, data: Mapping[str, Any] | SchemaDescription) -> str:
        """Same as :meth:`render` but returns ``str``."""
        description = describe(data)
        layout = _Layout(indent=self.indent, compact=self.compact)

        slots: dict[str, str] = dict.fromkeys(SLOT_ORDER, "")
        imports: dict[str, str] = {}

        if description.syntax is not None:
            slots["syntax"] = _write_syntax(description.syntax)
        if description.package is not None:
            slots["package"] = _write_package(description.package)
        if description.option is not None:
            slots["option"] = _write_options(description.option, layout)
        if description.message is not None:
            slots["message"] = _write_messages(description.message, layout)
        if description.service is not None:
            slots["service"] = _write_services(description.service, layout, imports)
        if imports:
            slots["import"] = _write_imports(imports, layout)

        return _assemble(slots, layout)


def encode(
    data: Mapping[str, Any] | SchemaDescription,
    *,
    indent: bool = True,
    compact: bool = False,
) -> bytes:
    """Render *data* with a throwaway :class:`Renderer`."""
    return Renderer(indent=indent, compact=compact).render(data)


# ---------------------------------------------------------------------------
# Section writers
# ---------------------------------------------------------------------------

def _write_syntax(syntax: SyntaxValue) -> str:
    return f'syntax = "{syntax.value}";'


def _write_package(package: PackageValue) -> str:
    return f"package {package.value};"


def _write_options(options: OptionList, layout: _Layout) -> str:
    return layout.newline.join(
        f'option "{option.name}" = "{option.value}";' for option in options.options
    )


def _write_imports(imports: dict[str, str], layout: _Layout) -> str:
    """*imports* maps each required path to the reason it was requested."""
    return layout.newline.join(f'import "{path}";' for path in imports)


def _write_messages(messages: MessageMap, layout: _Layout) -> str:
    return layout.separator.join(
        _write_message(message, layout) for message in messages.messages
    )


def _write_message(message: Message, layout: _Layout) -> str:
    # Tags follow declaration order: 1..N, dense, per message.
    lines = [f"message {message.name} {{"]
    for tag, field in enumerate(message.fields, start=1):
        lines.append(f"{layout.tab}{field.type} {field.name} = {tag};")
    lines.append("}")
    return layout.newline.join(lines)


def _write_services(
    services: ServiceMap, layout: _Layout, imports: dict[str, str]
) -> str:
    return layout.separator.join(
        _write_service(service, layout, imports) for service in services.services
    )


def _write_service(service: Service, layout: _Layout, imports: dict[str, str]) -> str:
    lines = [f"service {service.name} {{"]
    for method in service.methods:
        request = _resolve_type(method.input, imports)
        response = _resolve_type(method.output, imports)
        lines.append(
            f"{layout.tab}rpc {method.name} ({request}) returns ({response}) {{}};"
        )
    lines.append("}")
    return layout.newline.join(lines)


def _resolve_type(token: str, imports: dict[str, str]) -> str:
    """Map a raw method type token to its rendered form.

    * blank -> ``google.protobuf.Empty`` (and the empty import is requested)
    * ``+Name`` -> ``stream Name``
    * anything else is used verbatim
    """
    if not token.strip():
        imports.setdefault(EMPTY_IMPORT, "empty")
        return EMPTY_TYPE
    if token.startswith(STREAM_SENTINEL):
        return f"{STREAM_KEYWORD} {token[len(STREAM_SENTINEL):]}"
    return token


# ---------------------------------------------------------------------------
# Assembler
# ---------------------------------------------------------------------------

def _assemble(slots: dict[str, str], layout: _Layout) -> str:
    return layout.separator.join(
        slots[name] for name in SLOT_ORDER if slots[name]
    )
