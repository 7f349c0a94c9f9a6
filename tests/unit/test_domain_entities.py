"""Tests for resource entities.

Covers construction invariants, API key usability and audit updates.
"""

from datetime import timedelta

import pytest

from tenantry.domain.entities import Space
from tenantry.domain.enums import ApiKeyStatus, ResourceType
from tests.conftest import (
    FIXED_NOW,
    make_api_key,
    make_embedder,
    make_space,
    make_user,
    new_id,
)


class TestResource:
    def test_resource_type_is_per_class(self):
        owner = new_id()

        assert make_space(owner).resource_type is ResourceType.SPACE
        assert make_api_key(owner).resource_type is ResourceType.APIKEY
        assert make_embedder(owner).resource_type is ResourceType.EMBEDDER
        assert make_user().resource_type is ResourceType.USER

    def test_labels_must_be_strings(self):
        with pytest.raises(ValueError, match="Invalid label"):
            make_space(new_id(), labels={"tier": 1})

    def test_touch_records_actor_and_time(self):
        space = make_space(new_id())
        editor = new_id()
        later = FIXED_NOW + timedelta(minutes=5)

        space.touch(editor, later)

        assert space.updated_by_id == editor
        assert space.updated_at == later
        assert space.created_at == FIXED_NOW


class TestSpace:
    def test_blank_name_rejected(self):
        with pytest.raises(ValueError, match="name"):
            make_space(new_id(), name="   ")

    def test_public_flag_drives_visibility(self):
        assert make_space(new_id(), public_read=True).is_public is True
        assert make_space(new_id()).is_public is False

    def test_is_a_dataclass_with_defaults(self):
        space = Space(
            id=new_id(),
            owner_id=new_id(),
            name="docs",
            embedder_id=new_id(),
            created_at=FIXED_NOW,
            updated_at=FIXED_NOW,
        )

        assert space.labels == {}
        assert space.public_read is False


class TestApiKey:
    def test_active_key_without_expiry_is_usable(self):
        assert make_api_key(new_id()).is_usable(FIXED_NOW)

    def test_inactive_key_is_not_usable(self):
        key = make_api_key(new_id(), status=ApiKeyStatus.INACTIVE)

        assert not key.is_usable(FIXED_NOW)

    def test_expiry_boundary(self):
        key = make_api_key(new_id(), expires_at=FIXED_NOW)

        assert key.is_expired(FIXED_NOW)
        assert not key.is_expired(FIXED_NOW - timedelta(seconds=1))

    def test_record_use(self):
        key = make_api_key(new_id())

        key.record_use(FIXED_NOW)

        assert key.last_used_at == FIXED_NOW

    def test_empty_hash_rejected(self):
        with pytest.raises(ValueError):
            make_api_key(new_id(), key_hash="")


class TestUser:
    def test_user_owns_itself(self):
        with pytest.raises(ValueError, match="own itself"):
            make_user(owner_id=new_id())

    def test_email_required(self):
        with pytest.raises(ValueError, match="email"):
            make_user(email="not-an-email")


class TestEmbedder:
    def test_dimensionality_must_be_positive(self):
        with pytest.raises(ValueError, match="dimensionality"):
            make_embedder(new_id(), dimensionality=0)

    def test_connection_key(self):
        embedder = make_embedder(new_id())

        assert embedder.connection_key == (
            "https://embed.example.com",
            "/v1/embeddings",
            "all-minilm-l6-v2",
        )

    def test_credentials_hidden_from_repr(self):
        assert "sk-test" not in repr(make_embedder(new_id()))
