"""
Session-scoped secret resolution.

``SecretResolver`` resolves secret references by running provider commands
(1Password, ``pass``, or an arbitrary shell command) and caches the plaintext
so that authentication prompts, such as a biometric unlock for ``op``, happen
at most once per session rather than once per configuration block.

Typical usage:

```python
resolver = SecretResolver()

secrets = collect_secrets_ordered(env_maps)
await resolver.pre_resolve(secrets)          # may prompt, once per secret

for env in env_maps:
    resolved = resolver.resolve_env_map(env)  # cache only, never prompts
```
"""

import asyncio
import logging
import threading
from collections.abc import Iterable, Mapping, Sequence
from concurrent.futures import Future
from dataclasses import dataclass

from .errors import (
    OutputDecodingError,
    PreviouslyFailedError,
    ProviderError,
    ProviderExecutionFailedError,
    SecretNotResolvedError,
    SecretResolutionError,
)
from .models import (
    EnvMap,
    EnvValue,
    PlainValue,
    SecretReference,
    collect_secrets,
    collect_secrets_ordered,
)
from .process import ProcessRunner, run_process
from .providers import provider_command

logger = logging.getLogger(__name__)

# Long enough for a user to answer an interactive unlock prompt
DEFAULT_TIMEOUT = 300.0


@dataclass(frozen=True)
class ResolverStats:
    """Entry counts of a resolver's caches. Never includes values."""

    resolved: int
    failed: int
    in_flight: int


class SecretResolver:
    """
    Resolves secret references and caches the results for the session.

    The resolver holds two caches keyed by ``SecretReference``: resolved
    plaintext values and failure messages. Both only grow; a failed secret is
    not retried until ``clear_failure`` is called or a new resolver is created.

    ## Sequential Resolution

    ``pre_resolve`` runs provider commands one at a time in the order given.
    Providers like 1Password prompt for authentication on the first ``op read``
    and reuse the unlocked session afterwards, so running them one by one
    means the prompt appears once, before any other reference is attempted.

    ## Thread Safety

    One resolver is meant to be shared by every caller in a session. The caches
    are guarded by a ``threading.Lock`` that is only held for single lookups,
    inserts or snapshots, never while a provider command runs.

    Concurrent ``pre_resolve`` calls for the same unresolved reference share a
    single provider invocation: the first caller registers an in-flight future
    and later callers wait on it instead of running the provider again.
    """

    def __init__(
        self,
        runner: ProcessRunner | None = None,
        timeout: float | None = DEFAULT_TIMEOUT,
        platform: str | None = None,
    ):
        """
        Initialize the resolver.

        Args:
            runner: Process execution function; defaults to ``run_process``
            timeout: Per-invocation timeout in seconds, None disables it
            platform: ``sys.platform`` value used for provider dispatch
        """
        self._runner = runner or run_process
        self.timeout = timeout
        self._platform = platform
        self._cache: dict[SecretReference, str] = {}
        self._failures: dict[SecretReference, str] = {}
        self._in_flight: dict[SecretReference, Future[None]] = {}
        self._lock = threading.Lock()

    collect_secrets = staticmethod(collect_secrets)

    async def pre_resolve(self, secrets: Iterable[SecretReference]) -> None:
        """Resolve the given secrets sequentially, populating the caches.

        References that already have a cached value or a cached failure are
        skipped, so calling this again with the same references is a no-op.
        A failing reference does not stop the batch; successful results stay
        cached even when the call as a whole fails.

        Raises:
            SecretResolutionError: If one or more secrets failed during this call
        """
        errors: list[tuple[SecretReference, str]] = []
        for secret in secrets:
            message = await self._ensure_resolved(secret)
            if message is not None:
                errors.append((secret, message))

        if errors:
            raise SecretResolutionError(errors)

    async def resolve_env_maps(self, envs: Sequence[Mapping[str, EnvValue]]) -> list[EnvMap]:
        """Pre-resolve every secret in ``envs`` and return the rewritten maps."""
        await self.pre_resolve(collect_secrets_ordered(envs))
        return [self.resolve_env_map(env) for env in envs]

    def resolve_env_map(self, env: Mapping[str, EnvValue]) -> EnvMap:
        """Replace secret entries with plain values from the cache.

        Entries are checked in key order and the first problem aborts the
        rewrite. Providers are never invoked.

        Raises:
            PreviouslyFailedError: If a secret failed during ``pre_resolve``
            SecretNotResolvedError: If a secret was never pre-resolved
        """
        resolved: dict[str, EnvValue] = {}
        with self._lock:
            for key in sorted(env):
                value = env[key]
                secret = value.as_secret()
                if secret is None:
                    resolved[key] = value
                elif secret in self._cache:
                    resolved[key] = PlainValue(value=self._cache[secret])
                elif secret in self._failures:
                    raise PreviouslyFailedError(key, secret, self._failures[secret])
                else:
                    raise SecretNotResolvedError(key, secret)

        return {key: resolved[key] for key in env}

    def is_resolved(self, secret: SecretReference) -> bool:
        with self._lock:
            return secret in self._cache

    def failure_for(self, secret: SecretReference) -> str | None:
        """Return the cached failure message for ``secret``, if any."""
        with self._lock:
            return self._failures.get(secret)

    def clear_failure(self, secret: SecretReference) -> bool:
        """Forget a cached failure so the next ``pre_resolve`` retries it.

        Returns:
            True if a failure was removed
        """
        with self._lock:
            removed = self._failures.pop(secret, None) is not None
        if removed:
            logger.debug(f"Cleared cached failure for secret {secret}")
        return removed

    def clear_failures(self) -> int:
        """Forget all cached failures. Returns how many were removed."""
        with self._lock:
            count = len(self._failures)
            self._failures.clear()
        return count

    def stats(self) -> ResolverStats:
        with self._lock:
            return ResolverStats(
                resolved=len(self._cache),
                failed=len(self._failures),
                in_flight=len(self._in_flight),
            )

    async def _ensure_resolved(self, secret: SecretReference) -> str | None:
        """Make sure ``secret`` has a cache entry.

        Returns:
            The failure message if the secret failed while this call was
            resolving or waiting for it, otherwise None
        """
        while True:
            with self._lock:
                if secret in self._cache or secret in self._failures:
                    logger.debug(f"Secret {secret} already cached, skipping")
                    return None
                pending = self._in_flight.get(secret)
                if pending is None:
                    pending = Future()
                    self._in_flight[secret] = pending
                    break

            logger.debug(f"Secret {secret} is being resolved by another caller, waiting")
            # Shielded so a cancelled waiter does not cancel the shared future
            await asyncio.shield(asyncio.wrap_future(pending))
            with self._lock:
                if secret in self._cache:
                    return None
                if secret in self._failures:
                    return self._failures[secret]
            # The other caller was cancelled before storing a result; try again

        try:
            return await self._resolve_and_store(secret)
        finally:
            with self._lock:
                self._in_flight.pop(secret, None)
            pending.set_result(None)

    async def _resolve_and_store(self, secret: SecretReference) -> str | None:
        try:
            value = await self._fetch(secret)
        except ProviderError as e:
            message = (
                f"failed to resolve secret (provider: {secret.provider}, "
                f"reference: {secret.reference}): {e}"
            )
            with self._lock:
                self._failures[secret] = message
            logger.info(message)
            return message

        with self._lock:
            self._cache[secret] = value
        logger.debug(f"Resolved secret {secret}")
        return None

    async def _fetch(self, secret: SecretReference) -> str:
        program, args = provider_command(secret, self._platform)
        logger.debug(f"Running secret provider command '{program}' for {secret}")

        try:
            output = await self._runner(program, args, self.timeout)
        except (OSError, ValueError) as e:
            # ValueError: arguments the OS cannot pass, e.g. an embedded NUL byte
            raise ProviderError(
                f"failed to execute secret provider command: {program} {' '.join(args)}: {e}",
                secret.provider,
            ) from e

        if not output.success:
            stderr = output.stderr.decode("utf-8", errors="replace")
            raise ProviderExecutionFailedError(secret.provider, output.returncode, stderr.strip())

        try:
            return output.stdout.decode("utf-8").strip()
        except UnicodeDecodeError as e:
            raise OutputDecodingError(secret.provider, e) from e
