"""secretenv SDK - secret references in environment maps.

### Secrets (`secretenv.sdk.secrets`)
Secret references, env values, provider dispatch and the session resolver.

### Configuration (`secretenv.sdk.core.config`)
YAML configuration with resolver settings and named environments.
"""
