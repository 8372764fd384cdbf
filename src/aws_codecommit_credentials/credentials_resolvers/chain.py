# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import logging
from collections.abc import Sequence
from typing import Final

from .._identity import AWSCredentialIdentity
from ..config import CredentialsConfig
from ..exceptions import ConfigError
from .assume_role import AssumeRoleCredentialsResolver
from .default_chain import DefaultChainCredentialsSource
from .environment import EnvironmentCredentialsSource
from .interfaces import CredentialsResolver, CredentialsSource
from .profile import ProfileCredentialsSource

logger: Final = logging.getLogger(__name__)

_DEFAULT_SOURCES: Sequence[CredentialsSource] = (
    EnvironmentCredentialsSource(),
    ProfileCredentialsSource(),
    DefaultChainCredentialsSource(),
)


class CredentialsResolverChain(CredentialsResolver):
    """Resolves AWS Credentials from the first available ambient source."""

    def __init__(
        self,
        *,
        config: CredentialsConfig,
        sources: Sequence[CredentialsSource] = _DEFAULT_SOURCES,
    ) -> None:
        self._config = config
        self._sources: Sequence[CredentialsSource] = sources
        self._credentials_resolver: CredentialsResolver | None = None

    def get_identity(self) -> AWSCredentialIdentity:
        if self._credentials_resolver is not None:
            return self._credentials_resolver.get_identity()

        for source in self._sources:
            if source.is_available(config=self._config):
                logger.debug("Resolving credentials from %s.", type(source).__name__)
                self._credentials_resolver = source.build_resolver(config=self._config)
                return self._credentials_resolver.get_identity()

        raise ConfigError(
            "None of the configured credentials sources were able to resolve "
            "credentials."
        )


def create_credentials_resolver(
    *,
    region: str,
    role_arn: str | None = None,
    config: CredentialsConfig | None = None,
) -> CredentialsResolver:
    """Build the resolver for one credentials request.

    The returned resolver memoizes what it loads, so it must not be shared between
    requests for different regions or role ARNs.

    :param region: Region of the repository, used for the STS endpoint.
    :param role_arn: Role to assume. Overrides any role ARN in ``config``.
    :param config: Configuration, read from the process environment if omitted.
    :raises ConfigError: Both a role ARN and a named profile are configured.
    """
    if config is None:
        config = CredentialsConfig.from_environment()
    config = config.with_role_arn(role_arn)
    config.validate()

    if config.role_arn is not None:
        return AssumeRoleCredentialsResolver(
            role_arn=config.role_arn, region=region, config=config
        )
    return CredentialsResolverChain(config=config)


def resolve_credentials(
    *,
    region: str,
    role_arn: str | None = None,
    config: CredentialsConfig | None = None,
) -> AWSCredentialIdentity:
    """Resolve AWS credentials, assuming ``role_arn`` when it is given.

    :raises ConfigError: Required environment is missing or contradictory.
    :raises CredentialError: The provider or STS failed to return credentials.
    """
    resolver = create_credentials_resolver(
        region=region, role_arn=role_arn, config=config
    )
    return resolver.get_identity()
