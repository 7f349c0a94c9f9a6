"""Tests for tenantry/application/services/page_token.py."""

import base64

import pytest

from tenantry.application.services import decode_page_token, encode_page_token
from tenantry.core.enums import ErrorCode
from tenantry.core.result import Failure, Success
from tenantry.domain.enums import ApiKeyStatus
from tenantry.domain.value_objects import QuerySpec
from tests.conftest import new_id


class TestPageToken:
    def test_token_carries_the_whole_request(self):
        requestor = new_id()
        owner = new_id()
        spec = QuerySpec(
            owner_filter=owner,
            label_selectors={"env": "prod"},
            name_pattern="note*",
            attribute_filters={"status": ApiKeyStatus.ACTIVE},
            sort_by="updated_at",
            sort_ascending=True,
            include_public=True,
        )

        token = encode_page_token(requestor, spec, offset=20, limit=10)
        result = decode_page_token(token, requestor)

        assert result == Success(
            value=QuerySpec(
                owner_filter=owner,
                label_selectors={"env": "prod"},
                name_pattern="note*",
                attribute_filters={"status": "active"},
                sort_by="updated_at",
                sort_ascending=True,
                offset=20,
                limit=10,
                include_public=True,
            )
        )

    def test_token_is_url_safe_and_unpadded(self):
        token = encode_page_token(new_id(), QuerySpec(), offset=1, limit=1)

        assert "=" not in token
        assert set(token) <= set(
            "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"
        )

    def test_boolean_filters_survive(self):
        requestor = new_id()
        token = encode_page_token(
            requestor,
            QuerySpec(attribute_filters={"public_read": True}),
            offset=5,
            limit=5,
        )

        result = decode_page_token(token, requestor)

        assert isinstance(result, Success)
        assert result.value.attribute_filters == {"public_read": True}

    def test_token_bound_to_requestor(self):
        token = encode_page_token(new_id(), QuerySpec(), offset=10, limit=10)

        result = decode_page_token(token, new_id())

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.PAGE_TOKEN_INVALID
        assert result.error.message == "Invalid pagination token"

    @pytest.mark.parametrize(
        "token",
        [
            "",
            "!!!",
            "bm90IGpzb24",
            base64.urlsafe_b64encode(b'{"offset": 1}').decode(),
            base64.urlsafe_b64encode(b"\xff\xfe").decode(),
        ],
    )
    def test_corrupted_tokens(self, token):
        result = decode_page_token(token, new_id())

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.PAGE_TOKEN_INVALID

    def test_negative_offset_rejected(self):
        requestor = new_id()
        payload = (
            '{"requestor_id": "%s", "offset": -1, "limit": 10}' % requestor
        ).encode()

        result = decode_page_token(
            base64.urlsafe_b64encode(payload).decode().rstrip("="), requestor
        )

        assert isinstance(result, Failure)
