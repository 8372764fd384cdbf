# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""AWS CodeCommit credentials derives short-lived Git credentials for CodeCommit
repositories from AWS credentials, for use as a Git credential helper or in clone
URLs."""

from ._identity import AWSCredentialIdentity, CodeCommitCredentials
from ._url import RepositoryURL, is_codecommit_url, parse_region, parse_url
from .clone_url import assemble, build_clone_url, get_credentials
from .config import CredentialsConfig
from .signers import CodeCommitSigner, SigningContext

__license__ = "Apache-2.0"
__version__ = "0.1.0"

__all__ = (
    "AWSCredentialIdentity",
    "CodeCommitCredentials",
    "CodeCommitSigner",
    "CredentialsConfig",
    "RepositoryURL",
    "SigningContext",
    "assemble",
    "build_clone_url",
    "get_credentials",
    "is_codecommit_url",
    "parse_region",
    "parse_url",
)
