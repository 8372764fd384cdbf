# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import logging
from typing import Final

from awscrt.auth import AwsCredentialsProvider
from awscrt.exceptions import AwsCrtError

from .._identity import AWSCredentialIdentity
from ..config import CredentialsConfig
from ..exceptions import ConfigError
from ._caching import CachingCredentialsResolver
from .interfaces import CredentialsResolver, CredentialsSource
from .profile import identity_from_crt

logger: Final = logging.getLogger(__name__)


class DefaultChainCredentialsResolver(CachingCredentialsResolver):
    """Resolves AWS Credentials through the AWS default provider chain.

    The chain covers the ``default`` profile of the shared credentials and config
    files, web identity tokens, container credentials and the EC2 instance metadata
    service.
    """

    def _get_identity(self) -> AWSCredentialIdentity:
        logger.debug("Loading credentials from the AWS default provider chain.")
        try:
            provider = AwsCredentialsProvider.new_default_chain()
            credentials = provider.get_credentials().result()
        except AwsCrtError as e:
            raise ConfigError(
                "None of the configured credentials sources were able to resolve "
                "credentials. Set AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY, "
                f"AWS_PROFILE, or a default profile ({e.name}: {e.message})"
            ) from e
        return identity_from_crt(credentials)


class DefaultChainCredentialsSource(CredentialsSource):
    def is_available(self, config: CredentialsConfig) -> bool:
        return True

    def build_resolver(self, config: CredentialsConfig) -> CredentialsResolver:
        return DefaultChainCredentialsResolver()
