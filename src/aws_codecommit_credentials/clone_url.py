# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""Entry points that turn a repository URL into CodeCommit Git credentials."""

import datetime
import logging
from typing import Final

from ._identity import CodeCommitCredentials
from ._url import RepositoryURL, is_codecommit_url, parse_region, parse_url
from .config import CredentialsConfig
from .credentials_resolvers import CredentialsResolver, create_credentials_resolver
from .exceptions import AssemblyError
from .signers import CodeCommitSigner, SigningContext

logger: Final = logging.getLogger(__name__)

_SIGNER: Final = CodeCommitSigner()


def assemble(
    url: str | RepositoryURL, credentials: CodeCommitCredentials | None
) -> str:
    """Embed ``credentials`` as the userinfo of a CodeCommit ``url``.

    A URL that already carries userinfo, or that is not a CodeCommit URL, is returned
    unchanged.

    :raises ParseError: The URL is malformed.
    :raises AssemblyError: The URL needs credentials that are missing or could not
        be embedded.
    """
    parsed = parse_url(url)
    if parsed.has_userinfo or not is_codecommit_url(parsed):
        return url if isinstance(url, str) else url.build()

    if credentials is None or not credentials.username or not credentials.password:
        raise AssemblyError(
            f"no credentials were derived for CodeCommit host {parsed.host!r}"
        )
    try:
        rendered = parsed.with_userinfo(
            credentials.username, credentials.password
        ).build()
    except (TypeError, ValueError) as e:
        raise AssemblyError(
            f"unable to build clone URL for CodeCommit host {parsed.host!r}: {e}"
        ) from e
    if not rendered:
        raise AssemblyError(
            f"clone URL for CodeCommit host {parsed.host!r} rendered empty"
        )
    return rendered


def get_credentials(
    url: str | RepositoryURL,
    role_arn: str | None = None,
    *,
    config: CredentialsConfig | None = None,
    resolver: CredentialsResolver | None = None,
    now: datetime.datetime | None = None,
) -> CodeCommitCredentials:
    """Derive the Git username and password for a CodeCommit repository URL.

    :param url: The repository URL.
    :param role_arn: Role to assume before signing.
    :param config: Credential configuration, read from the environment if omitted.
    :param resolver: A credentials resolver to use instead of building one for this
        request.
    :param now: Signing time. Defaults to the current time.
    :raises CodeCommitCredentialsError: Any stage of the derivation failed.
    """
    parsed = parse_url(url)
    region = parse_region(parsed)
    if resolver is None:
        resolver = create_credentials_resolver(
            region=region, role_arn=role_arn, config=config
        )
    identity = resolver.get_identity()

    context = SigningContext.build(
        url=parsed, region=region, credentials=identity, now=now
    )
    return _SIGNER.derive(context=context)


def build_clone_url(
    url: str | RepositoryURL,
    role_arn: str | None = None,
    *,
    config: CredentialsConfig | None = None,
    resolver: CredentialsResolver | None = None,
    now: datetime.datetime | None = None,
) -> str:
    """Return ``url`` with CodeCommit credentials embedded.

    URLs that already carry userinfo, and URLs for other Git hosts, are returned
    unchanged without resolving any AWS credentials.

    :raises CodeCommitCredentialsError: Any stage of the derivation failed.
    """
    parsed = parse_url(url)
    if parsed.has_userinfo or not is_codecommit_url(parsed):
        logger.debug("Leaving clone URL for host %r unchanged.", parsed.host)
        return assemble(url, None)

    credentials = get_credentials(
        parsed, role_arn, config=config, resolver=resolver, now=now
    )
    return assemble(parsed, credentials)
