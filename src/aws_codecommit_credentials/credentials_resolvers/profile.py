# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import logging
from typing import Final

from awscrt.auth import AwsCredentials, AwsCredentialsProvider
from awscrt.exceptions import AwsCrtError

from .._identity import AWSCredentialIdentity
from ..config import CredentialsConfig
from ..exceptions import CredentialError
from ._caching import CachingCredentialsResolver
from .interfaces import CredentialsResolver, CredentialsSource

logger: Final = logging.getLogger(__name__)


def identity_from_crt(credentials: AwsCredentials) -> AWSCredentialIdentity:
    return AWSCredentialIdentity(
        access_key_id=credentials.access_key_id,
        secret_access_key=credentials.secret_access_key,
        session_token=credentials.session_token or None,
    )


class ProfileCredentialsResolver(CachingCredentialsResolver):
    """Resolves AWS Credentials for a named profile in the shared config files."""

    def __init__(
        self,
        *,
        profile_name: str,
        config_filepath: str | None = None,
        credentials_filepath: str | None = None,
    ) -> None:
        super().__init__()
        self._profile_name = profile_name
        self._config_filepath = config_filepath
        self._credentials_filepath = credentials_filepath

    def _get_identity(self) -> AWSCredentialIdentity:
        logger.debug("Loading credentials for profile %r.", self._profile_name)
        try:
            provider = AwsCredentialsProvider.new_profile(
                profile_name=self._profile_name,
                config_filepath=self._config_filepath,
                credentials_filepath=self._credentials_filepath,
            )
            credentials = provider.get_credentials().result()
        except AwsCrtError as e:
            raise CredentialError(
                f"Unable to load credentials for profile {self._profile_name!r}: "
                f"{e.name}: {e.message}"
            ) from e

        return identity_from_crt(credentials)


class ProfileCredentialsSource(CredentialsSource):
    def is_available(self, config: CredentialsConfig) -> bool:
        return config.uses_profile

    def build_resolver(self, config: CredentialsConfig) -> CredentialsResolver:
        assert config.profile is not None
        return ProfileCredentialsResolver(profile_name=config.profile)
