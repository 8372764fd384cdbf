# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from .._identity import AWSCredentialIdentity
from .interfaces import CredentialsResolver


class StaticCredentialsResolver(CredentialsResolver):
    """Resolve Static AWS Credentials."""

    def __init__(self, *, credentials: AWSCredentialIdentity) -> None:
        self._credentials = credentials

    def get_identity(self) -> AWSCredentialIdentity:
        return self._credentials
