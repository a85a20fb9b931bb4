"""Pydantic models for secretenv configuration.

The configuration file holds resolver settings and named environments, each
an env map whose values are plain strings or ``$secret`` references.
"""

from typing import Any

from pydantic import ConfigDict, Field

from secretenv.sdk.models import SdkBaseModel
from secretenv.sdk.secrets import DEFAULT_TIMEOUT, EnvMap, EnvValueField, SecretResolver


class ResolverSettingsModel(SdkBaseModel):
    """Settings for the secret resolver.

    Attributes:
        timeout: Seconds to wait for each provider command. ``null`` waits
            forever. Keep it long enough for interactive unlock prompts.

    Example:
        >>> settings = ResolverSettingsModel(timeout=60)
    """

    # Allow mutability for config merging
    model_config = ConfigDict(extra="forbid", frozen=False)

    timeout: float | None = Field(default=DEFAULT_TIMEOUT, gt=0)


class SecretEnvConfigModel(SdkBaseModel):
    """Root configuration.

    ```yaml
    resolver:
      timeout: 300
    environments:
      github:
        GITHUB_TOKEN:
          $secret:
            provider: 1password
            reference: op://Private/GitHub/token
        LOG_LEVEL: debug
    ```

    Attributes:
        resolver: Resolver settings
        environments: Named env maps
    """

    # Allow mutability for config merging
    model_config = ConfigDict(extra="forbid", frozen=False)

    resolver: ResolverSettingsModel = Field(default_factory=ResolverSettingsModel)
    environments: dict[str, dict[str, EnvValueField]] = Field(default_factory=dict)

    def get_environment(self, name: str) -> EnvMap:
        """Return the env map called ``name``.

        Raises:
            KeyError: If no environment has that name
        """
        try:
            return self.environments[name]
        except KeyError:
            available = ", ".join(sorted(self.environments)) or "none"
            raise KeyError(f"Unknown environment '{name}' (available: {available})") from None

    def create_resolver(self) -> SecretResolver:
        """Create a resolver configured from these settings."""
        return SecretResolver(timeout=self.resolver.timeout)


def json_schema() -> dict[str, Any]:
    """Return the JSON schema of the configuration file."""
    return SecretEnvConfigModel.model_json_schema()
