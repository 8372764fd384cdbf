# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from dataclasses import dataclass
from datetime import UTC, datetime


@dataclass(kw_only=True)
class AWSCredentialIdentity:
    access_key_id: str
    """A unique identifier for an AWS user or role."""

    secret_access_key: str
    """A secret key used in conjunction with the access key ID to authenticate
    programmatic access to AWS services."""

    session_token: str | None = None
    """A temporary token used to specify the current session for the supplied
    credentials."""

    expiration: datetime | None = None
    """The expiration time of the identity.

    If time zone is provided, it is updated to UTC. The value must always be in UTC.
    """

    def __post_init__(self) -> None:
        if self.expiration is not None and self.expiration.tzinfo is not None:
            self.expiration = self.expiration.astimezone(UTC)

    @property
    def is_expired(self) -> bool:
        """Whether the identity is expired."""
        if self.expiration is None:
            return False
        expiration = self.expiration
        if expiration.tzinfo is None:
            expiration = expiration.replace(tzinfo=UTC)
        return datetime.now(tz=UTC) >= expiration

    def __repr__(self) -> str:
        return (
            f"AWSCredentialIdentity(access_key_id={self.access_key_id!r}, "
            f"session_token={'<set>' if self.session_token else None}, "
            f"expiration={self.expiration!r})"
        )


@dataclass(kw_only=True, frozen=True)
class CodeCommitCredentials:
    """Username and one-time password for a CodeCommit Git endpoint.

    The password embeds its signing timestamp and is only accepted by the service
    for a short window after it was derived.
    """

    username: str
    password: str

    def __repr__(self) -> str:
        # The username carries the session token after the "%" separator.
        access_key_id = self.username.split("%", 1)[0]
        return f"CodeCommitCredentials(username={access_key_id!r}, password=<redacted>)"
