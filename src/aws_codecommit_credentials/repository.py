# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""Thin wrapper around GitPython for the clone, pull and push commands."""

import logging
import os
import posixpath
from typing import Final

import git
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from ._url import parse_url
from .exceptions import RepositoryError

logger: Final = logging.getLogger(__name__)

DEFAULT_CREDENTIAL_HELPER: Final = "!codecommit credential-helper"

# git pull output when the tracked branch does not exist on the remote yet.
_EMPTY_REMOTE_ERRORS: Final = ("couldn't find remote ref", "no such ref was fetched")


def credential_helper_environment(helper: str) -> dict[str, str]:
    """Git configuration, passed through the environment, that makes Git ask
    ``helper`` for credentials of each repository path."""
    return {
        "GIT_CONFIG_COUNT": "2",
        "GIT_CONFIG_KEY_0": "credential.helper",
        "GIT_CONFIG_VALUE_0": helper,
        "GIT_CONFIG_KEY_1": "credential.UseHttpPath",
        "GIT_CONFIG_VALUE_1": "true",
    }


class RepoWrapper:
    """Runs Git operations for CodeCommit repositories.

    Pull and push obtain fresh credentials from the credential helper, so no
    derived password is ever stored in the repository configuration.
    """

    def __init__(self, *, credential_helper: str = DEFAULT_CREDENTIAL_HELPER) -> None:
        self._env = credential_helper_environment(credential_helper)

    def clone(
        self, clone_url: str, dest: str, *, remote_url: str | None = None
    ) -> tuple[git.Repo, bool]:
        """Clone ``clone_url`` into ``dest``.

        :param clone_url: URL to clone, which may carry derived credentials.
        :param dest: Destination directory.
        :param remote_url: URL recorded for ``origin`` after cloning. Use it to keep
            credentials embedded in ``clone_url`` out of the repository config.
        :returns: The repository and whether it was cloned from an empty remote.
        """
        logger.debug("Cloning Git repo %s to %s", parse_url(clone_url).host, dest)
        try:
            repo = git.Repo.clone_from(clone_url, dest, env=self._env)
        except GitCommandError as e:
            raise RepositoryError(
                f"Failed to clone into {dest}: exit status {e.status}"
            ) from e

        if remote_url is not None:
            repo.remotes.origin.set_url(remote_url)

        is_empty = not repo.head.is_valid()
        if is_empty:
            logger.warning("Cloned an empty repository into %s", dest)
        return repo, is_empty

    def pull(self, path: str) -> None:
        """Pull ``origin`` into ``path``, including into a clone of an empty remote.

        A remote that still has no commits is reported with a warning.
        """
        repo = self._repo(path)
        try:
            with repo.git.custom_environment(**self._env):
                repo.remotes.origin.pull()
        except GitCommandError as e:
            stderr = str(e.stderr).strip()
            if any(message in stderr for message in _EMPTY_REMOTE_ERRORS):
                logger.warning("Warning: remote repository of %s is empty", path)
                return
            raise RepositoryError(f"Failed to pull {path}: {stderr}") from e

    def push(self, path: str) -> None:
        repo = self._repo(path)
        try:
            with repo.git.custom_environment(**self._env):
                results = repo.remotes.origin.push()
        except GitCommandError as e:
            raise RepositoryError(f"Failed to push {path}: {e.stderr.strip()}") from e

        for result in results:
            if result.flags & git.PushInfo.ERROR:
                raise RepositoryError(
                    f"Failed to push {result.local_ref}: {result.summary.strip()}"
                )
            if result.flags & git.PushInfo.UP_TO_DATE:
                logger.warning(
                    "Warning: %s is already up to date", result.remote_ref_string
                )

    def get_dest_path(self, url: str) -> str:
        """Return the basename of the URL path with any ``.git`` suffix stripped."""
        basename = posixpath.basename(parse_url(url).path.rstrip("/"))
        return basename.removesuffix(".git")

    def _repo(self, path: str) -> git.Repo:
        try:
            return git.Repo(os.path.abspath(path))
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise RepositoryError(f"{path} is not a Git repository") from e
