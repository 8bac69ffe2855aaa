"""Pydantic v2 models for the protog schema description.

Each top-level section of a ``.proto`` document has its own closed variant
(``SyntaxValue``, ``PackageValue``, ``OptionList``, ``MessageMap``,
``ServiceMap``) so the renderer receives a fully typed description and never
inspects raw payloads.  Collections are ordered lists: the order in which the
caller declares messages, fields, services and methods is the order in which
they are rendered and numbered.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, model_validator

STREAM_SENTINEL = "+"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


def _reject_duplicates(kind: str, names: list[str]) -> None:
    seen: set[str] = set()
    for name in names:
        if name in seen:
            raise ValueError(f"duplicate {kind} name {name!r}")
        seen.add(name)


# ---------------------------------------------------------------------------
# Scalar sections
# ---------------------------------------------------------------------------

class SyntaxValue(_Frozen):
    """The ``syntax = "...";`` declaration."""
    value: StrictStr = Field(..., description="Syntax level, e.g. 'proto3'")


class PackageValue(_Frozen):
    """The ``package ...;`` declaration."""
    value: StrictStr = Field(..., description="Package name, e.g. 'greet.v1'")


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

class Option(_Frozen):
    """A single file-level option."""
    name: StrictStr = Field(..., description="Option name, e.g. 'go_package'")
    value: StrictStr = Field(..., description="Option value, always rendered quoted")


class OptionList(_Frozen):
    options: list[Option] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------

class MessageField(_Frozen):
    """A message field. Its tag is derived from its position, never stored."""
    name: StrictStr = Field(..., description="Field name")
    type: StrictStr = Field(..., description="Field type, e.g. 'int64' or 'HelloRequest'")


class Message(_Frozen):
    name: StrictStr = Field(..., description="Message name")
    fields: list[MessageField] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_fields(self) -> "Message":
        _reject_duplicates("field", [f.name for f in self.fields])
        return self


class MessageMap(_Frozen):
    messages: list[Message] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_messages(self) -> "MessageMap":
        _reject_duplicates("message", [m.name for m in self.messages])
        return self


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------

class Method(_Frozen):
    """An RPC method descriptor.

    ``input`` and ``output`` keep the raw type tokens: an empty token means
    "no payload" and a leading ``+`` marks a stream.  Both are resolved at
    render time.  The aliases match the ``in``/``out`` keys of the loose form.
    """
    name: StrictStr = Field(..., description="Method name")
    input: StrictStr = Field(default="", alias="in")
    output: StrictStr = Field(default="", alias="out")

    @model_validator(mode="after")
    def _named_streams(self) -> "Method":
        for token in (self.input, self.output):
            if token.startswith(STREAM_SENTINEL) and not token[1:].strip():
                raise ValueError(f"method {self.name!r}: stream marker without a type")
        return self


class Service(_Frozen):
    name: StrictStr = Field(..., description="Service name")
    methods: list[Method] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_methods(self) -> "Service":
        _reject_duplicates("method", [m.name for m in self.methods])
        return self


class ServiceMap(_Frozen):
    services: list[Service] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_services(self) -> "ServiceMap":
        _reject_duplicates("service", [s.name for s in self.services])
        return self


# ---------------------------------------------------------------------------
# Whole description
# ---------------------------------------------------------------------------

class SchemaDescription(_Frozen):
    """Typed description of one ``.proto`` document.

    Every section is optional.  A missing section renders nothing.
    """
    syntax: Optional[SyntaxValue] = None
    package: Optional[PackageValue] = None
    option: Optional[OptionList] = None
    message: Optional[MessageMap] = None
    service: Optional[ServiceMap] = None
