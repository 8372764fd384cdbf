# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from .._identity import AWSCredentialIdentity
from .interfaces import CredentialsResolver


class CachingCredentialsResolver(CredentialsResolver):
    """Resolves credentials once and reuses them until they expire."""

    def __init__(self) -> None:
        self._cached: AWSCredentialIdentity | None = None

    def get_identity(self) -> AWSCredentialIdentity:
        if self._cached is None or self._cached.is_expired:
            self._cached = self._get_identity()
        return self._cached

    def _get_identity(self) -> AWSCredentialIdentity:
        raise NotImplementedError
