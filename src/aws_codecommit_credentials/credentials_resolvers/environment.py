# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from .._identity import AWSCredentialIdentity
from ..config import ENV_ACCESS_KEY_ID, ENV_SECRET_ACCESS_KEY, CredentialsConfig
from ..exceptions import ConfigError
from ._caching import CachingCredentialsResolver
from .interfaces import CredentialsResolver, CredentialsSource


class EnvironmentCredentialsResolver(CachingCredentialsResolver):
    """Resolves AWS Credentials from system environment variables."""

    def __init__(self, *, config: CredentialsConfig | None = None) -> None:
        super().__init__()
        self._config = config

    def _get_identity(self) -> AWSCredentialIdentity:
        # Read the environment lazily so a resolver built ahead of time still sees
        # the variables present when credentials are first requested.
        config = self._config or CredentialsConfig.from_environment()
        if config.access_key_id is None or config.secret_access_key is None:
            raise ConfigError(
                f"{ENV_ACCESS_KEY_ID} and {ENV_SECRET_ACCESS_KEY} are required"
            )

        return AWSCredentialIdentity(
            access_key_id=config.access_key_id,
            secret_access_key=config.secret_access_key,
            session_token=config.session_token,
        )


class EnvironmentCredentialsSource(CredentialsSource):
    def is_available(self, config: CredentialsConfig) -> bool:
        return config.access_key_id is not None and config.secret_access_key is not None

    def build_resolver(self, config: CredentialsConfig) -> CredentialsResolver:
        return EnvironmentCredentialsResolver(config=config)
