"""Credential handling."""

from tenantry.infrastructure.security.api_key_authenticator import ApiKeyAuthenticator
from tenantry.infrastructure.security.secret_codec import SecretCodec

__all__ = ["ApiKeyAuthenticator", "SecretCodec"]
