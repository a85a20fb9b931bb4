"""Base Pydantic models for the secretenv SDK.

This module provides the base model class that all SDK Pydantic models should inherit from.
It establishes consistent configuration across all models including:

- Strict field validation (no extra fields allowed)
- Immutable instances, which also makes them hashable and usable as cache keys

Example:
    >>> from secretenv.sdk.models import SdkBaseModel
    >>>
    >>> class Pair(SdkBaseModel):
    ...     left: str
    ...     right: str
    >>>
    >>> Pair(left="a", right="b") == Pair(left="a", right="b")
    True
"""

from pydantic import BaseModel, ConfigDict


class SdkBaseModel(BaseModel):
    """Base model for all secretenv SDK Pydantic models.

    - extra="forbid": Rejects any fields not defined in the model
    - frozen=True: Makes instances immutable and hashable

    Configuration models that are merged after loading override
    ``model_config`` with ``frozen=False``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)
