"""secretenv - resolve secret references in environment variable maps."""

from secretenv.sdk.core.version import PACKAGE_VERSION as __version__

__all__ = ["__version__"]
