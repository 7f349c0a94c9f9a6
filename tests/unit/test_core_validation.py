"""Tests for tenantry/core/validation.py."""

from types import MappingProxyType
from uuid import UUID

import pytest

from tenantry.core.enums import ErrorCode
from tenantry.core.errors import ValidationError
from tenantry.core.result import Failure, Success
from tenantry.core.validation import (
    parse_identifier,
    parse_optional_identifier,
    validate_labels,
    validate_not_empty,
    validate_positive,
)

SPACE_ID = UUID("0190f3a6-2b7c-7d4e-9f10-1234567890ab")


class TestParseIdentifier:
    @pytest.mark.parametrize(
        "raw",
        [
            SPACE_ID,
            str(SPACE_ID),
            f"  {SPACE_ID}  ",
            SPACE_ID.bytes,
            bytearray(SPACE_ID.bytes),
        ],
    )
    def test_accepted_forms(self, raw):
        assert parse_identifier(raw, "space_id") == Success(value=SPACE_ID)

    @pytest.mark.parametrize("raw", ["not-a-uuid", b"short", 42, None, ""])
    def test_rejected_forms_name_the_field(self, raw):
        result = parse_identifier(raw, "space_id")

        assert isinstance(result, Failure)
        assert isinstance(result.error, ValidationError)
        assert result.error.code == ErrorCode.IDENTIFIER_INVALID
        assert result.error.message == "Invalid space_id"
        assert result.error.field == "space_id"
        assert result.error.kind == "invalid_argument"


class TestParseOptionalIdentifier:
    @pytest.mark.parametrize("raw", [None, "", b""])
    def test_absent_values(self, raw):
        assert parse_optional_identifier(raw, "owner_id") == Success(value=None)

    def test_present_value_is_parsed(self):
        assert parse_optional_identifier(str(SPACE_ID), "owner_id") == Success(
            value=SPACE_ID
        )

    def test_malformed_value_fails(self):
        result = parse_optional_identifier("xyz", "owner_id")

        assert isinstance(result, Failure)
        assert result.error.message == "Invalid owner_id"


class TestValidateNotEmpty:
    def test_strips_strings(self):
        assert validate_not_empty("  docs ", "name") == Success(value="docs")

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_blank_fails(self, raw):
        result = validate_not_empty(raw, "name")

        assert isinstance(result, Failure)
        assert result.error.message == "name is required"


class TestValidatePositive:
    def test_positive(self):
        assert validate_positive(3, "dimensionality") == Success(value=3)

    @pytest.mark.parametrize("raw", [0, -1])
    def test_non_positive(self, raw):
        assert isinstance(validate_positive(raw, "dimensionality"), Failure)


class TestValidateLabels:
    def test_copies_valid_map(self):
        labels = {"env": "prod"}

        result = validate_labels(labels, "labels")

        assert result == Success(value={"env": "prod"})
        assert result.value is not labels

    def test_accepts_read_only_mapping(self):
        result = validate_labels(MappingProxyType({"env": "prod"}), "labels")

        assert result == Success(value={"env": "prod"})
        assert type(result.value) is dict

    @pytest.mark.parametrize(
        "raw", [{"env": 1}, {"": "x"}, {" ": "x"}, ["env", "prod"], None]
    )
    def test_malformed_maps(self, raw):
        result = validate_labels(raw, "labels")

        assert isinstance(result, Failure)
        assert result.error.field == "labels"
