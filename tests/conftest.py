"""Shared pytest fixtures for the protog test suite.

Provides reusable fixtures for:
- Loose schema mappings (minimal, messages only, full greeter)
- A typed ``SchemaDescription`` equivalent to the greeter mapping
- A clean environment without ``PROTOG_*`` variables
"""

from __future__ import annotations

from typing import Any

import pytest

from protog.encoder.models import (
    Message,
    MessageField,
    MessageMap,
    Method,
    PackageValue,
    SchemaDescription,
    Service,
    ServiceMap,
    SyntaxValue,
)


# ---------------------------------------------------------------------------
# Loose descriptions
# ---------------------------------------------------------------------------

@pytest.fixture
def minimal_description() -> dict[str, Any]:
    """Only the two sections every caller supplies."""
    return {"syntax": "proto3", "package": "Hello"}


@pytest.fixture
def greeter_description() -> dict[str, Any]:
    """Two messages and a service with one empty and one streaming method."""
    return {
        "syntax": "proto3",
        "package": "greet.v1",
        "option": [["go_package", "greet/v1"]],
        "message": {
            "HelloRequest": {"name": "string", "count": "int32"},
            "HelloReply": {"message": "string"},
        },
        "service": {
            "Greeter": {
                "SayHello": {"in": "HelloRequest", "out": "HelloReply"},
                "Ping": {"in": "", "out": ""},
                "Chat": {"in": "+HelloRequest", "out": "+HelloReply"},
            },
        },
    }


@pytest.fixture
def greeter_text() -> str:
    """The expected non-compact rendering of ``greeter_description``."""
    return (
        'syntax = "proto3";\n'
        "\n"
        "package greet.v1;\n"
        "\n"
        'option "go_package" = "greet/v1";\n'
        "\n"
        'import "google/protobuf/empty.proto";\n'
        "\n"
        "message HelloRequest {\n"
        "\tstring name = 1;\n"
        "\tint32 count = 2;\n"
        "}\n"
        "\n"
        "message HelloReply {\n"
        "\tstring message = 1;\n"
        "}\n"
        "\n"
        "service Greeter {\n"
        "\trpc SayHello (HelloRequest) returns (HelloReply) {};\n"
        "\trpc Ping (google.protobuf.Empty) returns (google.protobuf.Empty) {};\n"
        "\trpc Chat (stream HelloRequest) returns (stream HelloReply) {};\n"
        "}"
    )


# ---------------------------------------------------------------------------
# Typed description
# ---------------------------------------------------------------------------

@pytest.fixture
def typed_hello() -> SchemaDescription:
    """A typed description built without the loose adapter."""
    return SchemaDescription(
        syntax=SyntaxValue(value="proto3"),
        package=PackageValue(value="Hello"),
        message=MessageMap(
            messages=[
                Message(
                    name="Hello",
                    fields=[
                        MessageField(name="id", type="int64"),
                        MessageField(name="name", type="string"),
                    ],
                ),
            ]
        ),
        service=ServiceMap(
            services=[
                Service(name="HelloService", methods=[Method(name="Get", input="Hello")]),
            ]
        ),
    )


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every ``PROTOG_*`` variable so defaults apply."""
    for name in (
        "PROTOG_SYNTAX",
        "PROTOG_OUTPUT_DIR",
        "PROTOG_FORCE",
        "PROTOG_INDENT",
        "PROTOG_COMPACT",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
