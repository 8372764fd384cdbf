# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from datetime import UTC, datetime, timedelta, timezone

import pytest
from aws_codecommit_credentials import AWSCredentialIdentity, CodeCommitCredentials


@pytest.mark.parametrize(
    "expiration,is_expired",
    [
        (None, False),
        (datetime(1970, 1, 1, tzinfo=UTC), True),
        (datetime.now(UTC) + timedelta(hours=1), False),
        # Naive values are read as UTC.
        (datetime(2000, 1, 1), True),
    ],
)
def test_is_expired(expiration: datetime | None, is_expired: bool) -> None:
    identity = AWSCredentialIdentity(
        access_key_id="AKID1234EXAMPLE",
        secret_access_key="SECRET1234",
        expiration=expiration,
    )
    assert identity.is_expired is is_expired


def test_expiration_normalized_to_utc() -> None:
    identity = AWSCredentialIdentity(
        access_key_id="AKID1234EXAMPLE",
        secret_access_key="SECRET1234",
        expiration=datetime(2024, 5, 1, 2, 0, 0, tzinfo=timezone(timedelta(hours=2))),
    )
    assert identity.expiration == datetime(2024, 5, 1, 0, 0, 0, tzinfo=UTC)
    assert identity.expiration.tzinfo is UTC


def test_identity_repr_hides_secrets() -> None:
    identity = AWSCredentialIdentity(
        access_key_id="AKID1234EXAMPLE",
        secret_access_key="SECRET1234",
        session_token="SESS_TOKEN_1234",
    )
    assert "SECRET1234" not in repr(identity)
    assert "SESS_TOKEN_1234" not in repr(identity)


def test_credentials_repr_hides_secrets() -> None:
    credentials = CodeCommitCredentials(
        username="AKID1234EXAMPLE%SESS_TOKEN_1234", password="20240101T000000Zabcdef"
    )
    assert "SESS_TOKEN_1234" not in repr(credentials)
    assert "abcdef" not in repr(credentials)
    assert "AKID1234EXAMPLE" in repr(credentials)
