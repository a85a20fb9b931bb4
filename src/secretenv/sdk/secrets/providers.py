"""
Secret provider dispatch.

Maps a ``SecretReference`` to the external command that prints the secret on
standard output. The provider set is closed:

- ``1password``: ``op read <reference>``
- ``pass``: ``pass show <reference>`` (not available on Windows)
- ``command``: runs ``<reference>`` through ``sh -c`` (``pwsh`` on Windows)

The ``command`` provider executes the reference text verbatim in a shell. It
is an escape hatch for integrating any other secret store, and the
configuration author is trusted: no quoting or sanitization is applied.
"""

import sys
from enum import Enum

from .errors import UnsupportedPlatformError, UnsupportedProviderError
from .models import SecretReference


class Provider(str, Enum):
    """Known secret providers."""

    ONEPASSWORD = "1password"
    PASS = "pass"
    COMMAND = "command"


POWERSHELL_FLAGS = ["-NoLogo", "-NoProfile", "-NonInteractive", "-Command"]


def is_windows(platform: str | None = None) -> bool:
    return (platform or sys.platform) == "win32"


def provider_command(
    secret: SecretReference, platform: str | None = None
) -> tuple[str, list[str]]:
    """Return the program and argument list that resolve ``secret``.

    Args:
        secret: The reference to resolve
        platform: A ``sys.platform`` value; defaults to the running platform

    Returns:
        Tuple of (program, arguments)

    Raises:
        UnsupportedProviderError: If the provider name is unknown
        UnsupportedPlatformError: If the provider cannot run on ``platform``
    """
    try:
        provider = Provider(secret.provider)
    except ValueError:
        raise UnsupportedProviderError(secret.provider) from None

    windows = is_windows(platform)

    if provider is Provider.ONEPASSWORD:
        return "op", ["read", secret.reference]

    if provider is Provider.PASS:
        if windows:
            raise UnsupportedPlatformError(provider.value, "Windows")
        return "pass", ["show", secret.reference]

    # Provider.COMMAND
    return shell_command(secret.reference, windows)


def shell_command(command: str, windows: bool) -> tuple[str, list[str]]:
    """Wrap a command line for the platform shell."""
    if windows:
        return "pwsh", [*POWERSHELL_FLAGS, command]
    return "sh", ["-c", command]
