# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from typing import Protocol

from .._identity import AWSCredentialIdentity
from ..config import CredentialsConfig


class CredentialsResolver(Protocol):
    """Resolves AWS credentials for a single credentials request."""

    def get_identity(self) -> AWSCredentialIdentity:
        """Load the credentials, raising a CodeCommitCredentialsError on failure."""
        ...


class CredentialsSource(Protocol):
    def is_available(self, config: CredentialsConfig) -> bool:
        """Returns True if credentials are available from this source."""
        ...

    def build_resolver(self, config: CredentialsConfig) -> CredentialsResolver:
        """Builds a credentials resolver for the given configuration."""
        ...
