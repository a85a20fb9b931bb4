"""secretenv SDK Core - configuration and package information.

- `secretenv.sdk.core.config`: YAML configuration with named environments
- `secretenv.sdk.core.version`: `PACKAGE_NAME`, `PACKAGE_VERSION`, `get_package_info()`
"""

from .version import PACKAGE_NAME, PACKAGE_VERSION, get_package_info

__all__ = ["PACKAGE_NAME", "PACKAGE_VERSION", "get_package_info"]
