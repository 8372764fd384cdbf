# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""Git credential-helper protocol.

See https://git-scm.com/docs/gitcredentials#_custom_helpers for details.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final
from urllib.parse import urlunsplit

from ._identity import CodeCommitCredentials
from .exceptions import ConfigError

HELPER_TEMPLATE: Final = "username={username}\npassword={password}\n"

GIT_CREDENTIALS_HELPER_DOC: Final = (
    "https://git-scm.com/docs/gitcredentials#_custom_helpers"
)

_GIT_INPUT_RE = re.compile(r"^(.+?)=(.+)$")


@dataclass(kw_only=True)
class GitRequest:
    """Attributes of a credential request written by Git to the helper's stdin."""

    protocol: str = ""
    host: str = ""
    path: str = ""

    def url(self) -> str:
        path = self.path
        if path and not path.startswith("/"):
            path = f"/{path}"
        return urlunsplit((self.protocol, self.host, path, "", ""))


def parse_git_input(lines: Iterable[str]) -> GitRequest:
    """Read ``key=value`` lines until the input is exhausted.

    Only ``protocol``, ``host`` and ``path`` are kept. Other attributes and lines
    that are not ``key=value`` pairs are ignored.
    """
    request = GitRequest()
    for line in lines:
        match = _GIT_INPUT_RE.match(line.rstrip("\r\n"))
        if match is None:
            continue
        key, value = match.groups()
        if key == "protocol":
            request.protocol = value
        elif key == "host":
            request.host = value
        elif key == "path":
            request.path = value
    return request


def render(credentials: CodeCommitCredentials, template: str = HELPER_TEMPLATE) -> str:
    """Render ``credentials`` with ``template``.

    The template may reference ``{username}`` and ``{password}``.

    :raises ConfigError: The template references an unknown field or is malformed.
    """
    try:
        return template.format(
            username=credentials.username, password=credentials.password
        )
    except (KeyError, IndexError, ValueError) as e:
        raise ConfigError(f"invalid output template {template!r}: {e}") from e
