# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""
The ``codecommit`` command: Git credentials and Git operations for AWS CodeCommit.
"""

import argparse
import logging
import os
import sys
from collections.abc import Sequence
from typing import Final, TextIO

from . import __version__
from ._url import is_codecommit_url
from .clone_url import build_clone_url, get_credentials
from .config import ENV_ROLE_ARN, ENV_URL, CredentialsConfig
from .exceptions import CodeCommitCredentialsError, ConfigError, RepositoryError
from .helper import GIT_CREDENTIALS_HELPER_DOC, HELPER_TEMPLATE, parse_git_input, render
from .repository import RepoWrapper

logger: Final = logging.getLogger("aws_codecommit_credentials")

LOG_FORMAT: Final = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def credential(args: argparse.Namespace, stdout: TextIO) -> int:
    if not args.url:
        raise ConfigError(f"URL not specified, use --url or set {ENV_URL}")
    credentials = get_credentials(args.url, args.role_arn or None)
    stdout.write(render(credentials, args.template or HELPER_TEMPLATE))
    return 0


def credential_helper(args: argparse.Namespace, stdout: TextIO) -> int:
    if args.operation != "get":
        # Derived passwords are short lived, there is nothing to store or erase.
        logger.debug("Ignoring credential-helper operation %r.", args.operation)
        return 0

    request = parse_git_input(sys.stdin)
    url = request.url()
    if not is_codecommit_url(url):
        # Let Git fall through to the next configured helper.
        logger.debug("Not a CodeCommit host: %r", request.host)
        return 0

    config = CredentialsConfig.from_environment()
    credentials = get_credentials(url, config=config)
    stdout.write(render(credentials))
    return 0


def clone(args: argparse.Namespace, stdout: TextIO) -> int:
    positional = list(args.args)
    url = os.environ.get(ENV_URL)
    if url:
        if positional and "://" in positional[0]:
            logger.debug("%s is set, ignoring the URL argument.", ENV_URL)
            positional.pop(0)
    elif positional:
        url = positional.pop(0)
    else:
        raise ConfigError("clone URL not provided")
    if len(positional) > 1:
        raise ConfigError("too many arguments, expected URL [DIRECTORY]")

    wrapper = RepoWrapper()
    dest = positional[0] if positional else wrapper.get_dest_path(url)
    dest = os.path.abspath(dest)
    if os.path.isdir(dest) and os.listdir(dest):
        raise RepositoryError(f"{dest!r} is not empty, refusing to clone {url}")

    clone_url = build_clone_url(url, args.role_arn or None)
    stdout.write(f"cloning {url} to {dest}\n")
    wrapper.clone(clone_url, dest, remote_url=url)
    return 0


def pull(args: argparse.Namespace, stdout: TextIO) -> int:
    RepoWrapper().pull(os.path.abspath(args.directory))
    return 0


def push(args: argparse.Namespace, stdout: TextIO) -> int:
    RepoWrapper().push(os.path.abspath(args.directory))
    return 0


def version(args: argparse.Namespace, stdout: TextIO) -> int:
    stdout.write(f"Version {__version__}\n")
    return 0


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codecommit",
        description="Tool for working with AWS' CodeCommit (Git) service",
    )
    parser.add_argument(
        "--debug", action="store_true", help="Log debug messages to stderr"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    role_arn_help = (
        "Role to assume when retrieving AWS credentials, requires "
        "AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY to be set. "
        f"Defaults to ${ENV_ROLE_ARN}."
    )

    credential_parser = subparsers.add_parser(
        "credential",
        help="Emit credentials for URL",
        description=(
            "Emit CodeCommit credentials. Output can be templated with "
            "the {username} and {password} fields."
        ),
    )
    credential_parser.add_argument(
        "--url",
        default=os.environ.get(ENV_URL),
        help=f"Emit credentials for URL. Defaults to ${ENV_URL}.",
    )
    credential_parser.add_argument(
        "--template", default=None, help="Output template, for example '{password}'"
    )
    credential_parser.add_argument(
        "--role-arn", default=os.environ.get(ENV_ROLE_ARN), help=role_arn_help
    )
    credential_parser.set_defaults(func=credential)

    helper_parser = subparsers.add_parser(
        "credential-helper",
        help="Emit credentials for Git's credential-helper API",
        description=(
            f"Emit credentials for Git's credential-helper API. See "
            f"{GIT_CREDENTIALS_HELPER_DOC}. Example: git clone "
            "--config=credential.helper='!codecommit credential-helper' "
            "--config=credential.UseHttpPath=true URL"
        ),
    )
    helper_parser.add_argument("operation", choices=("get", "store", "erase"))
    helper_parser.set_defaults(func=credential_helper)

    clone_parser = subparsers.add_parser(
        "clone",
        help="Clone the CodeCommit repository to directory",
        description=(
            f"Clone the CodeCommit repository to directory. ${ENV_URL} replaces "
            "the URL argument when set."
        ),
    )
    clone_parser.add_argument("args", nargs="*", metavar="URL [DIRECTORY]")
    clone_parser.add_argument(
        "--role-arn", default=os.environ.get(ENV_ROLE_ARN), help=role_arn_help
    )
    clone_parser.set_defaults(func=clone)

    pull_parser = subparsers.add_parser("pull", help="Pull updates from CodeCommit")
    pull_parser.add_argument("directory", nargs="?", default=".")
    pull_parser.set_defaults(func=pull)

    push_parser = subparsers.add_parser("push", help="Push updates to CodeCommit")
    push_parser.add_argument("directory", nargs="?", default=".")
    push_parser.set_defaults(func=push)

    version_parser = subparsers.add_parser("version", help="Print the version info")
    version_parser.set_defaults(func=version)

    return parser


def main(argv: Sequence[str] | None = None, stdout: TextIO | None = None) -> int:
    args = create_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
    try:
        return args.func(args, stdout if stdout is not None else sys.stdout)
    except CodeCommitCredentialsError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
