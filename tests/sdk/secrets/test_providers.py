"""Tests for the provider dispatch table."""

import pytest

from secretenv.sdk.secrets import (
    Provider,
    SecretReference,
    UnsupportedPlatformError,
    UnsupportedProviderError,
    provider_command,
)


def ref(provider: str, reference: str) -> SecretReference:
    return SecretReference(provider=provider, reference=reference)


class TestPosixDispatch:
    def test_onepassword(self):
        program, args = provider_command(ref("1password", "op://v/i/f"), platform="linux")
        assert program == "op"
        assert args == ["read", "op://v/i/f"]

    def test_pass(self):
        program, args = provider_command(ref("pass", "email/work"), platform="darwin")
        assert program == "pass"
        assert args == ["show", "email/work"]

    def test_command_uses_posix_shell(self):
        program, args = provider_command(ref("command", "printenv OPENAI_API_KEY"), platform="linux")
        assert program == "sh"
        assert args == ["-c", "printenv OPENAI_API_KEY"]

    def test_command_reference_is_passed_verbatim(self):
        text = "echo 'a b' | tr a-z A-Z; exit 0"
        _, args = provider_command(ref("command", text), platform="linux")
        assert args[-1] == text


class TestWindowsDispatch:
    def test_onepassword(self):
        program, args = provider_command(ref("1password", "op://v/i/f"), platform="win32")
        assert program == "op"
        assert args == ["read", "op://v/i/f"]

    def test_command_uses_powershell_core(self):
        program, args = provider_command(ref("command", "$env:OPENAI_API_KEY"), platform="win32")
        assert program == "pwsh"
        assert args == [
            "-NoLogo",
            "-NoProfile",
            "-NonInteractive",
            "-Command",
            "$env:OPENAI_API_KEY",
        ]

    def test_pass_is_rejected(self):
        with pytest.raises(UnsupportedPlatformError) as exc_info:
            provider_command(ref("pass", "ignored"), platform="win32")
        assert "secret provider 'pass' is not supported on Windows" in str(exc_info.value)
        assert exc_info.value.provider == "pass"


class TestUnknownProviders:
    def test_unknown_provider(self):
        with pytest.raises(UnsupportedProviderError) as exc_info:
            provider_command(ref("unknown", "x"), platform="linux")
        assert "unsupported secret provider: 'unknown'" in str(exc_info.value)

    def test_provider_match_is_case_sensitive(self):
        with pytest.raises(UnsupportedProviderError):
            provider_command(ref("1Password", "op://v/i/f"), platform="linux")

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            provider_command(ref("vault", "secret/x"), platform="linux")


def test_provider_enum_values():
    assert [p.value for p in Provider] == ["1password", "pass", "command"]
