# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import datetime
import hmac
import logging
from dataclasses import dataclass, field
from hashlib import sha256
from typing import Final

from ._identity import AWSCredentialIdentity, CodeCommitCredentials
from ._url import RepositoryURL, parse_url
from .exceptions import CredentialError

logger: Final = logging.getLogger(__name__)

CODECOMMIT_SERVICE: Final = "codecommit"
SIGNING_ALGORITHM: Final = "AWS4-HMAC-SHA256"
SIGNING_KEY_PREFIX: Final = "AWS4"
REQUEST_TYPE: Final = "aws4_request"

# CodeCommit signs a pseudo request whose method is GIT.
GIT_METHOD: Final = "GIT"

SIGV4_TIMESTAMP_FORMAT: Final = "%Y%m%dT%H%M%S"
SIGV4_DATE_FORMAT: Final = "%Y%m%d"


def _to_utc(value: datetime.datetime) -> datetime.datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.UTC)
    return value.astimezone(datetime.UTC)


@dataclass(kw_only=True, frozen=True)
class SigningContext:
    """Everything required to sign a CodeCommit Git request at a point in time."""

    url: RepositoryURL
    region: str
    credentials: AWSCredentialIdentity
    time: datetime.datetime
    service: str = CODECOMMIT_SERVICE

    timestamp: str = field(init=False)
    """Signing time in basic ISO-8601 form without the zone designator."""

    date: str = field(init=False)
    """Date portion of ``timestamp`` used in the credential scope."""

    def __post_init__(self) -> None:
        utc_time = _to_utc(self.time)
        object.__setattr__(self, "time", utc_time)
        object.__setattr__(self, "timestamp", utc_time.strftime(SIGV4_TIMESTAMP_FORMAT))
        object.__setattr__(self, "date", utc_time.strftime(SIGV4_DATE_FORMAT))

    @classmethod
    def build(
        cls,
        *,
        url: str | RepositoryURL,
        region: str,
        credentials: AWSCredentialIdentity,
        now: datetime.datetime | None = None,
    ) -> "SigningContext":
        if now is None:
            now = datetime.datetime.now(datetime.UTC)
        return cls(
            url=parse_url(url), region=region, credentials=credentials, time=now
        )


class CodeCommitSigner:
    """Derives CodeCommit Git credentials with the AWS Signature Version 4 algorithm.

    CodeCommit does not sign a real HTTP request. The Git client presents the
    signature as an HTTP Basic password and the service reconstructs the same
    canonical pseudo request from the repository path and host.
    """

    def derive(self, *, context: SigningContext) -> CodeCommitCredentials:
        """Generate the username and password for the request in ``context``.

        :param context: The SigningContext holding the repository URL, region,
            credentials and signing time.
        """
        self._validate_identity(identity=context.credentials)
        string_to_sign = self.string_to_sign(
            canonical_request=self.canonical_request(context=context),
            context=context,
        )
        signature = self._signature(string_to_sign=string_to_sign, context=context)
        logger.debug(
            "Derived CodeCommit password for %s in %s with scope %s.",
            context.url.path,
            context.region,
            self._scope(context=context),
        )
        return CodeCommitCredentials(
            username=self.username(identity=context.credentials),
            password=f"{context.timestamp}Z{signature}",
        )

    def username(self, *, identity: AWSCredentialIdentity) -> str:
        if identity.session_token:
            return f"{identity.access_key_id}%{identity.session_token}"
        return identity.access_key_id

    def canonical_request(self, *, context: SigningContext) -> str:
        """The canonical request is a standardized string laying out the components
        used in the SigV4 signing algorithm.

        For CodeCommit the request has the fixed method ``GIT``, no query string, a
        single signed ``host`` field and an empty payload:
            GIT\n
            <Path>\n
            \n
            host:<Hostname>\n
            \n
            host\n
        """
        return (
            f"{GIT_METHOD}\n"
            f"{context.url.path}\n"
            "\n"
            f"host:{context.url.host}\n"
            "\n"
            "host\n"
        )

    def string_to_sign(self, *, canonical_request: str, context: SigningContext) -> str:
        """The string to sign concatenates the formal identifier of the signing
        algorithm, the signing DateTime, the scope of our credentials, and a hash of
        the canonical request.

            Algorithm \n
            RequestDateTime \n
            CredentialScope  \n
            HashedCanonicalRequest
        """
        return (
            f"{SIGNING_ALGORITHM}\n"
            f"{context.timestamp}\n"
            f"{self._scope(context=context)}\n"
            f"{sha256(canonical_request.encode()).hexdigest()}"
        )

    def _scope(self, *, context: SigningContext) -> str:
        # Scope format: <YYYYMMDD>/<AWS Region>/<AWS Service>/aws4_request
        return f"{context.date}/{context.region}/{context.service}/{REQUEST_TYPE}"

    def _signature(self, *, string_to_sign: str, context: SigningContext) -> str:
        # Components of Signing Key Calculation
        #
        # DateKey              = HMAC-SHA256("AWS4"+"<SecretAccessKey>", "<YYYYMMDD>")
        # DateRegionKey        = HMAC-SHA256(<DateKey>, "<aws-region>")
        # DateRegionServiceKey = HMAC-SHA256(<DateRegionKey>, "<aws-service>")
        # SigningKey = HMAC-SHA256(<DateRegionServiceKey>, "aws4_request")
        secret_key = context.credentials.secret_access_key
        k_date = self._hash(
            key=f"{SIGNING_KEY_PREFIX}{secret_key}".encode(), value=context.date
        )
        k_region = self._hash(key=k_date, value=context.region)
        k_service = self._hash(key=k_region, value=context.service)
        k_signing = self._hash(key=k_service, value=REQUEST_TYPE)

        return self._hash(key=k_signing, value=string_to_sign).hex()

    def _hash(self, key: bytes, value: str) -> bytes:
        return hmac.new(key=key, msg=value.encode(), digestmod=sha256).digest()

    def _validate_identity(self, *, identity: AWSCredentialIdentity) -> None:
        if not isinstance(identity, AWSCredentialIdentity):
            raise CredentialError(
                "Received unexpected value for credentials. Expected "
                f"AWSCredentialIdentity but received {type(identity)}."
            )
        if not identity.access_key_id or not identity.secret_access_key:
            raise CredentialError(
                "Credentials must include an access key id and a secret access key."
            )
        if identity.is_expired:
            raise CredentialError(
                f"Provided credentials expired at {identity.expiration}. Please "
                "refresh the credentials."
            )
