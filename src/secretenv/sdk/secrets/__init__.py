"""secretenv SDK Secrets - resolution of secret references in env maps.

## Key Components

- `SecretReference`: (provider, reference) pair identifying one external secret
- `PlainValue` / `SecretValue`: the two kinds of `EnvValue`
- `SecretResolver`: session cache with sequential `pre_resolve` and cache-only
  `resolve_env_map`
- `provider_command`: maps a reference to the `op`, `pass` or shell command
  that prints it

## Quick Example

```python
from secretenv.sdk.secrets import (
    PlainValue,
    SecretReference,
    SecretResolver,
    SecretValue,
    collect_secrets,
)

env = {
    "TOKEN": SecretValue(secret=SecretReference(provider="1password", reference="op://v/i/f")),
    "LOG_LEVEL": PlainValue(value="debug"),
}

resolver = SecretResolver()
await resolver.pre_resolve(sorted(collect_secrets(env), key=str))
resolved = resolver.resolve_env_map(env)
```
"""

from .errors import (
    EnvResolutionError,
    OutputDecodingError,
    PreviouslyFailedError,
    ProviderError,
    ProviderExecutionFailedError,
    ProviderTimeoutError,
    SecretError,
    SecretNotResolvedError,
    SecretResolutionError,
    UnresolvedSecretError,
    UnsupportedPlatformError,
    UnsupportedProviderError,
)
from .models import (
    EnvMap,
    EnvValue,
    EnvValueField,
    PlainValue,
    SecretReference,
    SecretValue,
    collect_secrets,
    collect_secrets_ordered,
    env_map_to_environ,
    parse_env_value,
)
from .process import ProcessOutput, ProcessRunner, run_process
from .providers import Provider, provider_command
from .resolver import DEFAULT_TIMEOUT, ResolverStats, SecretResolver

__all__ = [
    # Models
    "SecretReference",
    "PlainValue",
    "SecretValue",
    "EnvValue",
    "EnvValueField",
    "EnvMap",
    "parse_env_value",
    "collect_secrets",
    "collect_secrets_ordered",
    "env_map_to_environ",
    # Providers and processes
    "Provider",
    "provider_command",
    "ProcessOutput",
    "ProcessRunner",
    "run_process",
    # Resolver
    "SecretResolver",
    "ResolverStats",
    "DEFAULT_TIMEOUT",
    # Errors
    "SecretError",
    "ProviderError",
    "UnsupportedProviderError",
    "UnsupportedPlatformError",
    "ProviderExecutionFailedError",
    "OutputDecodingError",
    "ProviderTimeoutError",
    "SecretResolutionError",
    "UnresolvedSecretError",
    "EnvResolutionError",
    "SecretNotResolvedError",
    "PreviouslyFailedError",
]
