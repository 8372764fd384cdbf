# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from .assume_role import AssumeRoleCredentialsResolver
from .chain import (
    CredentialsResolverChain,
    create_credentials_resolver,
    resolve_credentials,
)
from .default_chain import DefaultChainCredentialsResolver
from .environment import EnvironmentCredentialsResolver
from .interfaces import CredentialsResolver
from .profile import ProfileCredentialsResolver
from .static import StaticCredentialsResolver

__all__ = (
    "AssumeRoleCredentialsResolver",
    "CredentialsResolver",
    "CredentialsResolverChain",
    "DefaultChainCredentialsResolver",
    "EnvironmentCredentialsResolver",
    "ProfileCredentialsResolver",
    "StaticCredentialsResolver",
    "create_credentials_resolver",
    "resolve_credentials",
)
