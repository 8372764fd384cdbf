# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import logging
import time
from typing import Final

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .._identity import AWSCredentialIdentity
from ..config import CredentialsConfig
from ..exceptions import CredentialError
from ._caching import CachingCredentialsResolver

logger: Final = logging.getLogger(__name__)

DEFAULT_DURATION_SECONDS: Final = 900
SESSION_NAME_PREFIX: Final = "aws-codecommit-credentials"


class AssumeRoleCredentialsResolver(CachingCredentialsResolver):
    """Exchanges base credentials from the environment for temporary credentials
    of ``role_arn`` through STS AssumeRole.

    The STS client is created for ``region``. No explicit timeout is configured, so
    botocore's default connect and read timeouts apply.
    """

    def __init__(
        self,
        *,
        role_arn: str,
        region: str,
        config: CredentialsConfig | None = None,
        duration_seconds: int = DEFAULT_DURATION_SECONDS,
        session_name: str | None = None,
    ) -> None:
        super().__init__()
        self._role_arn = role_arn
        self._region = region
        self._config = config
        self._duration_seconds = duration_seconds
        self._session_name = session_name

    def _get_identity(self) -> AWSCredentialIdentity:
        config = self._config or CredentialsConfig.from_environment()
        access_key_id, secret_access_key = config.require_base_credentials()
        session_name = self._session_name or f"{SESSION_NAME_PREFIX}-{time.time_ns()}"

        logger.debug("Assuming role %s in %s.", self._role_arn, self._region)
        try:
            client = boto3.client(
                "sts",
                region_name=self._region,
                aws_access_key_id=access_key_id,
                aws_secret_access_key=secret_access_key,
                aws_session_token=config.session_token,
            )
            response = client.assume_role(
                RoleArn=self._role_arn,
                RoleSessionName=session_name,
                DurationSeconds=self._duration_seconds,
            )
        except (BotoCoreError, ClientError) as e:
            raise CredentialError(f"Unable to assume role {self._role_arn}: {e}") from e

        credentials = response["Credentials"]
        return AWSCredentialIdentity(
            access_key_id=credentials["AccessKeyId"],
            secret_access_key=credentials["SecretAccessKey"],
            session_token=credentials["SessionToken"],
            expiration=credentials.get("Expiration"),
        )
