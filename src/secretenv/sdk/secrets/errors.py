"""Exceptions raised while resolving secret references."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import SecretReference


class SecretError(Exception):
    """Base class for all secret resolution errors."""


class ProviderError(SecretError):
    """A single secret provider invocation could not produce a value."""

    def __init__(self, message: str, provider: str | None = None):
        super().__init__(message)
        self.provider = provider


class UnsupportedProviderError(ProviderError, ValueError):
    """The provider name is not one of the known providers."""

    def __init__(self, provider: str):
        super().__init__(f"unsupported secret provider: '{provider}'", provider)


class UnsupportedPlatformError(ProviderError):
    """The provider exists but cannot run on the current platform."""

    def __init__(self, provider: str, platform_name: str):
        super().__init__(
            f"secret provider '{provider}' is not supported on {platform_name}", provider
        )
        self.platform_name = platform_name


class ProviderExecutionFailedError(ProviderError):
    """The provider command exited with a non-zero status."""

    def __init__(self, provider: str, exit_code: int | None, stderr: str):
        super().__init__(
            f"secret provider '{provider}' failed (exit code {exit_code}): {stderr}", provider
        )
        self.exit_code = exit_code
        self.stderr = stderr


class OutputDecodingError(ProviderError):
    """The provider command wrote output that is not valid UTF-8."""

    def __init__(self, provider: str | None, cause: UnicodeDecodeError):
        super().__init__(f"secret provider output is not valid UTF-8: {cause}", provider)


class ProviderTimeoutError(ProviderError):
    """The provider command did not finish within the configured timeout."""

    def __init__(self, command: str, timeout: float, provider: str | None = None):
        super().__init__(f"command '{command}' timed out after {timeout:g} seconds", provider)
        self.timeout = timeout


class SecretResolutionError(SecretError):
    """Aggregated failure of a ``pre_resolve`` batch.

    Attributes:
        failures: (reference, message) pairs in the order they failed.
    """

    def __init__(self, failures: list[tuple[SecretReference, str]]):
        messages = [message for _, message in failures]
        super().__init__(f"failed to resolve {len(failures)} secret(s): {'; '.join(messages)}")
        self.failures = failures


class UnresolvedSecretError(SecretError):
    """A secret value was used where a plain string was required."""

    def __init__(self, secret: SecretReference):
        super().__init__(
            f"unresolved secret reference (provider: {secret.provider}, "
            f"reference: {secret.reference})"
        )
        self.secret = secret


class EnvResolutionError(SecretError):
    """An env map entry could not be rewritten to a plain value."""

    def __init__(self, message: str, key: str, secret: SecretReference):
        super().__init__(message)
        self.key = key
        self.secret = secret


class SecretNotResolvedError(EnvResolutionError):
    """The secret was never passed to ``pre_resolve``."""

    def __init__(self, key: str, secret: SecretReference):
        super().__init__(
            f"secret not pre-resolved for '{key}' "
            f"(provider: {secret.provider}, reference: {secret.reference})",
            key,
            secret,
        )


class PreviouslyFailedError(EnvResolutionError):
    """The secret failed during ``pre_resolve``; carries the cached message."""

    def __init__(self, key: str, secret: SecretReference, cause: str):
        super().__init__(
            f"failed to resolve secret for '{key}' "
            f"(provider: {secret.provider}, reference: {secret.reference}): {cause}",
            key,
            secret,
        )
        self.cause = cause
