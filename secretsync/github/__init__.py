"""GitHub REST integration for environment-scoped Actions secrets."""

from .env_secrets import GitHubEnvironmentSecretsClient, PublicKeyInfo  # noqa: F401
