"""Secret references and env values.

An env map is a mapping from environment variable name to ``EnvValue``. Each
value is either a literal (``PlainValue``) or a pointer to a secret held in an
external store (``SecretValue``). In configuration files a bare string is a
plain value and a secret is written as a ``$secret`` mapping:

```yaml
GITHUB_TOKEN:
  $secret:
    provider: 1password
    reference: op://Private/GitHub/token
LOG_LEVEL: debug
```
"""

from collections.abc import Iterable, Mapping
from typing import Annotated, Any, Union

from pydantic import BeforeValidator, ConfigDict, Field, WithJsonSchema

from secretenv.sdk.models import SdkBaseModel

from .errors import UnresolvedSecretError

SECRET_KEY = "$secret"


class SecretReference(SdkBaseModel):
    """A reference to a secret stored in an external secret provider.

    Two references are the same cache entry iff both fields match exactly;
    no normalization is applied.

    Attributes:
        provider: The secret provider to use ("1password", "pass" on Unix-like
            systems, or "command")
        reference: The provider-specific reference, e.g. "op://vault/item/field"
            for 1Password or a shell command line for "command"
    """

    provider: str
    reference: str

    def __str__(self) -> str:
        return f"{self.provider}:{self.reference}"


class PlainValue(SdkBaseModel):
    """A literal configuration value."""

    value: str

    def as_plain(self) -> str | None:
        return self.value

    def as_secret(self) -> SecretReference | None:
        return None

    def into_plain_string(self) -> str:
        return self.value

    def to_raw(self) -> Any:
        """Return the configuration file form of this value."""
        return self.value


class SecretValue(SdkBaseModel):
    """A secret reference that will be resolved at runtime."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    secret: SecretReference = Field(alias=SECRET_KEY)

    def as_plain(self) -> str | None:
        return None

    def as_secret(self) -> SecretReference | None:
        return self.secret

    def into_plain_string(self) -> str:
        """Refuse to hand out an unresolved secret as a string."""
        raise UnresolvedSecretError(self.secret)

    def to_raw(self) -> Any:
        """Return the configuration file form of this value."""
        return {SECRET_KEY: self.secret.model_dump()}


EnvValue = Union[PlainValue, SecretValue]
EnvMap = dict[str, EnvValue]


def parse_env_value(raw: Any) -> EnvValue:
    """Convert a raw configuration value into an ``EnvValue``.

    Accepts strings, ``$secret`` mappings and existing env values.

    Raises:
        ValueError: If the value has any other shape
    """
    if isinstance(raw, (PlainValue, SecretValue)):
        return raw
    if isinstance(raw, str):
        return PlainValue(value=raw)
    if isinstance(raw, Mapping) and SECRET_KEY in raw:
        return SecretValue.model_validate(dict(raw))
    raise ValueError(
        f"env value must be a string or a '{SECRET_KEY}' mapping, got {type(raw).__name__}"
    )


_ENV_VALUE_JSON_SCHEMA: dict[str, Any] = {
    "anyOf": [
        {"type": "string", "description": "A plain string value."},
        {
            "type": "object",
            "description": "A secret reference that will be resolved at runtime.",
            "properties": {
                SECRET_KEY: {
                    "type": "object",
                    "properties": {
                        "provider": {
                            "type": "string",
                            "enum": ["1password", "pass", "command"],
                        },
                        "reference": {"type": "string"},
                    },
                    "required": ["provider", "reference"],
                    "additionalProperties": False,
                }
            },
            "required": [SECRET_KEY],
            "additionalProperties": False,
        },
    ]
}

# Field type for models that read env values straight from YAML/JSON
EnvValueField = Annotated[
    EnvValue,
    BeforeValidator(parse_env_value),
    WithJsonSchema(_ENV_VALUE_JSON_SCHEMA),
]


def collect_secrets(env: Mapping[str, EnvValue]) -> set[SecretReference]:
    """Extract all distinct secret references from an env map."""
    return {secret for value in env.values() if (secret := value.as_secret()) is not None}


def collect_secrets_ordered(envs: Iterable[Mapping[str, EnvValue]]) -> list[SecretReference]:
    """Extract distinct secret references from several env maps.

    Order is first appearance, walking the maps and their keys in iteration
    order, so interactive provider prompts happen in a reproducible order.
    """
    seen: set[SecretReference] = set()
    ordered: list[SecretReference] = []
    for env in envs:
        for value in env.values():
            secret = value.as_secret()
            if secret is not None and secret not in seen:
                seen.add(secret)
                ordered.append(secret)
    return ordered


def env_map_to_environ(env: Mapping[str, EnvValue]) -> dict[str, str]:
    """Convert a fully resolved env map into plain strings.

    Raises:
        UnresolvedSecretError: If any value is still a secret reference
    """
    return {key: value.into_plain_string() for key, value in env.items()}
