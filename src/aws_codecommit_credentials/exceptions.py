# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0


class CodeCommitCredentialsError(Exception):
    """Top-level exception to capture errors raised while deriving credentials."""


class ParseError(CodeCommitCredentialsError, ValueError):
    """The repository URL could not be parsed."""


class RegionError(CodeCommitCredentialsError, ValueError):
    """The URL is unset or its host is not a CodeCommit Git endpoint."""


class ConfigError(CodeCommitCredentialsError):
    """Required environment is missing or the configuration is contradictory."""


class CredentialError(CodeCommitCredentialsError):
    """AWS credentials could not be obtained from the provider or from STS."""


class AssemblyError(CodeCommitCredentialsError):
    """Credentials were derived but the clone URL could not be built."""


class RepositoryError(CodeCommitCredentialsError):
    """A delegated Git operation failed."""
