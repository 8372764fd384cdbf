# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from concurrent.futures import Future
from unittest.mock import Mock

import pytest
from awscrt.auth import AwsCredentials, AwsCredentialsProvider
from awscrt.exceptions import AwsCrtError

AMBIENT_AWS_VARIABLES = (
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "AWS_SESSION_TOKEN",
    "AWS_PROFILE",
    "AWS_DEFAULT_PROFILE",
    "AWS_SDK_LOAD_CONFIG",
    "AWS_ROLE_ARN",
    "AWS_WEB_IDENTITY_TOKEN_FILE",
    "AWS_CONTAINER_CREDENTIALS_RELATIVE_URI",
    "AWS_CONTAINER_CREDENTIALS_FULL_URI",
    "CODECOMMIT_ROLE_ARN",
    "CODECOMMIT_URL",
)


@pytest.fixture(autouse=True)
def isolated_aws_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> None:
    """Keep the developer's AWS setup and the instance metadata service out of
    every test."""
    for name in AMBIENT_AWS_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    aws_dir = tmp_path_factory.mktemp("aws")
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(aws_dir / "credentials"))
    monkeypatch.setenv("AWS_CONFIG_FILE", str(aws_dir / "config"))
    monkeypatch.setenv("AWS_EC2_METADATA_DISABLED", "true")


def _crt_provider(result: AwsCredentials | BaseException) -> Mock:
    future: Future[AwsCredentials] = Future()
    if isinstance(result, BaseException):
        future.set_exception(result)
    else:
        future.set_result(result)
    provider = Mock(spec=AwsCredentialsProvider)
    provider.get_credentials.return_value = future
    return provider


@pytest.fixture
def default_chain_unavailable(monkeypatch: pytest.MonkeyPatch) -> Mock:
    error = AwsCrtError(
        code=0,
        name="AWS_AUTH_CREDENTIALS_PROVIDER_CHAIN_SOURCE_FAILURE",
        message="no credentials found",
    )
    new_default_chain = Mock(return_value=_crt_provider(error))
    monkeypatch.setattr(AwsCredentialsProvider, "new_default_chain", new_default_chain)
    return new_default_chain
