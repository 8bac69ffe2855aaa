"""Unit tests for the command-line mini-grammar (protog.grammar).

Tests cover:
- parse_message (fields, malformed definitions)
- parse_service (optional in/out, streaming tokens passed through)
- parse_option (first colon splits)
- build_description (section assembly, omitted sections, redefinitions)
"""

from __future__ import annotations

import pytest

from protog.encoder import encode
from protog.grammar import (
    GrammarError,
    build_description,
    parse_message,
    parse_option,
    parse_service,
)


# ---------------------------------------------------------------------------
# parse_message
# ---------------------------------------------------------------------------


class TestParseMessage:
    @pytest.mark.unit
    def test_single_field(self):
        assert parse_message("HelloRequest[data:string]") == ("HelloRequest", {"data": "string"})

    @pytest.mark.unit
    def test_fields_keep_order(self):
        name, fields = parse_message("User[id:int64,name:string,tags:repeated string]")
        assert name == "User"
        assert list(fields.items()) == [
            ("id", "int64"),
            ("name", "string"),
            ("tags", "repeated string"),
        ]

    @pytest.mark.unit
    @pytest.mark.parametrize("token", ["Hello", "Hello[a:b][c:d]", "[id:int64]"])
    def test_bad_definition(self, token):
        with pytest.raises(GrammarError, match="error parsing message"):
            parse_message(token)

    @pytest.mark.unit
    @pytest.mark.parametrize("token", ["Hello[id]", "Hello[id:int64:extra]", "Hello[]"])
    def test_bad_fields(self, token):
        with pytest.raises(GrammarError, match="error parsing message fields"):
            parse_message(token)


# ---------------------------------------------------------------------------
# parse_service
# ---------------------------------------------------------------------------


class TestParseService:
    @pytest.mark.unit
    def test_full_method(self):
        assert parse_service("Greeter[SayHello:HelloRequest:HelloReply]") == (
            "Greeter",
            {"SayHello": {"in": "HelloRequest", "out": "HelloReply"}},
        )

    @pytest.mark.unit
    def test_missing_types_are_empty(self):
        _, methods = parse_service("Health[Check,Watch:Ping]")
        assert methods == {
            "Check": {"in": "", "out": ""},
            "Watch": {"in": "Ping", "out": ""},
        }

    @pytest.mark.unit
    def test_stream_prefix_passed_through(self):
        _, methods = parse_service("Upload[Send:+Chunk:Ack]")
        assert methods["Send"]["in"] == "+Chunk"

    @pytest.mark.unit
    def test_bad_definition(self):
        with pytest.raises(GrammarError, match="error parsing service"):
            parse_service("Greeter")

    @pytest.mark.unit
    def test_blank_method_name(self):
        with pytest.raises(GrammarError, match="error parsing service methods"):
            parse_service("Greeter[:A:B]")


# ---------------------------------------------------------------------------
# parse_option
# ---------------------------------------------------------------------------


class TestParseOption:
    @pytest.mark.unit
    def test_name_value(self):
        assert parse_option("go_package:greet/v1") == ("go_package", "greet/v1")

    @pytest.mark.unit
    def test_only_first_colon_splits(self):
        assert parse_option("go_package:github.com/x/y;v1:z") == (
            "go_package",
            "github.com/x/y;v1:z",
        )

    @pytest.mark.unit
    @pytest.mark.parametrize("token", ["go_package", ":value"])
    def test_bad_option(self, token):
        with pytest.raises(GrammarError):
            parse_option(token)


# ---------------------------------------------------------------------------
# build_description
# ---------------------------------------------------------------------------


class TestBuildDescription:
    @pytest.mark.unit
    def test_defaults_only(self):
        assert build_description("Greet.v1") == {"syntax": "proto3", "package": "Greet.v1"}

    @pytest.mark.unit
    def test_all_sections(self):
        description = build_description(
            "greet.v1",
            syntax="proto2",
            messages=["HelloRequest[data:string]"],
            services=["Greeter[SayHello:HelloRequest:]"],
            options=["go_package:greet/v1"],
        )
        assert description == {
            "syntax": "proto2",
            "package": "greet.v1",
            "option": [["go_package", "greet/v1"]],
            "message": {"HelloRequest": {"data": "string"}},
            "service": {"Greeter": {"SayHello": {"in": "HelloRequest", "out": ""}}},
        }

    @pytest.mark.unit
    def test_redefinition_replaces(self):
        description = build_description("p", messages=["A[x:int32]", "A[y:string]"])
        assert description["message"] == {"A": {"y": "string"}}

    @pytest.mark.unit
    def test_renders(self):
        description = build_description(
            "Hello",
            messages=["HelloRequest[data:string]"],
            services=["HelloService[SayHello:HelloRequest:]"],
        )
        assert encode(description).decode() == (
            'syntax = "proto3";\n\npackage Hello;\n\n'
            'import "google/protobuf/empty.proto";\n\n'
            "message HelloRequest {\n\tstring data = 1;\n}\n\n"
            "service HelloService {\n"
            "\trpc SayHello (HelloRequest) returns (google.protobuf.Empty) {};\n"
            "}"
        )
