# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""Parsing and classification of CodeCommit repository URLs."""

import re
from dataclasses import dataclass, replace
from functools import cached_property
from urllib.parse import quote, unquote, urlsplit, urlunsplit

from .exceptions import ParseError, RegionError

CODECOMMIT_HOST_RE = re.compile(r"git-codecommit\.([^.]+)\.amazonaws\.com")

_CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")


@dataclass(kw_only=True, frozen=True)
class RepositoryURL:
    """A parsed Git repository URL."""

    scheme: str = "https"
    """For example ``http`` or ``https``."""

    username: str | None = None
    """Username part of the userinfo URI component, percent-decoded."""

    password: str | None = None
    """Password part of the userinfo URI component, percent-decoded."""

    host: str = ""
    """The hostname as supplied, for example ``git-codecommit.us-east-1.amazonaws.com``."""

    port: int | None = None
    """An explicit port number."""

    path: str = ""
    """Path component of the URL, percent-decoded."""

    query: str = ""
    """Query component of the URL as string."""

    fragment: str = ""

    @property
    def has_userinfo(self) -> bool:
        return self.username is not None

    @property
    def netloc(self) -> str:
        """Construct netloc string in format ``{username}:{password}@{host}:{port}``

        ``username``, ``password``, and ``port`` are only included if set. ``password``
        is ignored, unless ``username`` is also set.
        """
        return self._netloc

    # cached_property does NOT behave like property, it actually allows for setting.
    # Therefore we need a layer of indirection.
    @cached_property
    def _netloc(self) -> str:
        if self.username is not None:
            password = (
                "" if self.password is None else f":{quote(self.password, safe='')}"
            )
            userinfo = f"{quote(self.username, safe='')}{password}@"
        else:
            userinfo = ""

        port = f":{self.port}" if self.port is not None else ""
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{userinfo}{host}{port}"

    def __repr__(self) -> str:
        password = None if self.password is None else "<redacted>"
        return (
            f"RepositoryURL(scheme={self.scheme!r}, username={self.username!r}, "
            f"password={password}, host={self.host!r}, port={self.port!r}, "
            f"path={self.path!r})"
        )

    def with_userinfo(self, username: str, password: str) -> "RepositoryURL":
        return replace(self, username=username, password=password)

    def build(self) -> str:
        """Construct URL string representation.

        Returns a string of the form
        ``{scheme}://{username}:{password}@{host}:{port}{path}?{query}#{fragment}``
        """
        return urlunsplit(
            (
                self.scheme,
                self.netloc,
                quote(self.path, safe="/"),
                self.query,
                self.fragment,
            )
        )


def parse_url(url: str | RepositoryURL) -> RepositoryURL:
    """Parse ``url`` into a :py:class:`RepositoryURL`.

    :raises ParseError: The URL is malformed.
    """
    if isinstance(url, RepositoryURL):
        return url
    if _CONTROL_CHARS_RE.search(url):
        raise ParseError(f"invalid URL {url!r}: contains control characters")
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError as e:
        raise ParseError(f"invalid URL {url!r}: {e}") from e

    # SplitResult.hostname lowercases, so split the netloc by hand to keep the
    # host as supplied.
    userinfo, _, hostport = parts.netloc.rpartition("@")
    if hostport.startswith("["):
        host = hostport[1 : hostport.index("]")]
    else:
        host = hostport.split(":", 1)[0]

    username = password = None
    if "@" in parts.netloc:
        raw_username, has_password, raw_password = userinfo.partition(":")
        username = unquote(raw_username)
        password = unquote(raw_password) if has_password else None

    return RepositoryURL(
        scheme=parts.scheme,
        username=username,
        password=password,
        host=host,
        port=port,
        path=unquote(parts.path),
        query=parts.query,
        fragment=parts.fragment,
    )


def _match_host(url: RepositoryURL) -> re.Match[str] | None:
    return CODECOMMIT_HOST_RE.fullmatch(url.host)


def is_codecommit_url(url: str | RepositoryURL) -> bool:
    """Return True if ``url`` points at a CodeCommit Git endpoint.

    :raises ParseError: The URL is malformed.
    """
    return _match_host(parse_url(url)) is not None


def parse_region(url: str | RepositoryURL | None) -> str:
    """Extract the AWS region from a CodeCommit repository URL.

    :raises ParseError: The URL is malformed.
    :raises RegionError: The URL is unset or is not a CodeCommit URL.
    """
    if url is None or url == "":
        raise RegionError("url is not set")
    parsed = parse_url(url)
    if not parsed.host:
        raise RegionError("url has no host")
    match = _match_host(parsed)
    if match is None:
        raise RegionError(f"invalid CodeCommit URL host {parsed.host!r}")
    return match.group(1)
