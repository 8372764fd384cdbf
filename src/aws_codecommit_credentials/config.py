# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Final

from .exceptions import ConfigError

ENV_ACCESS_KEY_ID: Final = "AWS_ACCESS_KEY_ID"
ENV_SECRET_ACCESS_KEY: Final = "AWS_SECRET_ACCESS_KEY"
ENV_SESSION_TOKEN: Final = "AWS_SESSION_TOKEN"
ENV_PROFILE: Final = "AWS_PROFILE"
ENV_SDK_LOAD_CONFIG: Final = "AWS_SDK_LOAD_CONFIG"
ENV_ROLE_ARN: Final = "CODECOMMIT_ROLE_ARN"
ENV_URL: Final = "CODECOMMIT_URL"

_FALSE_VALUES = ("", "0", "false", "no", "off")


@dataclass(kw_only=True, frozen=True)
class CredentialsConfig:
    """Credential related settings captured from the process environment."""

    access_key_id: str | None = None
    secret_access_key: str | None = None
    session_token: str | None = None

    profile: str | None = None
    """Named profile from the shared AWS config and credentials files."""

    load_config: bool = False
    """Whether named profiles may be loaded from the shared files."""

    role_arn: str | None = None
    """Role to assume before deriving credentials."""

    @classmethod
    def from_environment(
        cls, environ: Mapping[str, str] | None = None
    ) -> "CredentialsConfig":
        if environ is None:
            environ = os.environ

        profile = environ.get(ENV_PROFILE) or None
        load_config_value = environ.get(ENV_SDK_LOAD_CONFIG)
        if load_config_value is None:
            # Naming a profile implies loading the shared config files.
            load_config = profile is not None
        else:
            load_config = load_config_value.strip().lower() not in _FALSE_VALUES

        return cls(
            access_key_id=environ.get(ENV_ACCESS_KEY_ID),
            secret_access_key=environ.get(ENV_SECRET_ACCESS_KEY),
            session_token=environ.get(ENV_SESSION_TOKEN) or None,
            profile=profile,
            load_config=load_config,
            role_arn=environ.get(ENV_ROLE_ARN) or None,
        )

    @property
    def uses_profile(self) -> bool:
        return self.profile is not None and self.load_config

    def with_role_arn(self, role_arn: str | None) -> "CredentialsConfig":
        if not role_arn:
            return self
        return replace(self, role_arn=role_arn)

    def validate(self) -> None:
        """Check the configuration for contradictory settings.

        :raises ConfigError: Both a role ARN and a named profile are configured.
        """
        if self.role_arn and self.profile:
            raise ConfigError("only one of role arn or profile should be set")

    def require_base_credentials(self) -> tuple[str, str]:
        """Return the access key id and secret access key required for assuming a
        role.

        :raises ConfigError: One of the variables is not set.
        """
        for name, value in (
            (ENV_ACCESS_KEY_ID, self.access_key_id),
            (ENV_SECRET_ACCESS_KEY, self.secret_access_key),
        ):
            if value is None:
                raise ConfigError(
                    f"cannot assume role since the env var: '{name}' must be set"
                )
        assert self.access_key_id is not None
        assert self.secret_access_key is not None
        return self.access_key_id, self.secret_access_key

    def __repr__(self) -> str:
        return (
            f"CredentialsConfig(access_key_id={self.access_key_id!r}, "
            f"profile={self.profile!r}, load_config={self.load_config!r}, "
            f"role_arn={self.role_arn!r})"
        )
