"""
Configuration module for the Organizational Unit handler.

Loads configuration from environment variables. The AWS section controls how
the Organizations client is built; the handler section controls reconciler
behavior.
"""

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_TYPE_NAME = "Community::Organizations::OrganizationalUnit"

ROOT_SELECTION_FIRST = "first"
ROOT_SELECTION_STRICT = "strict"
ROOT_SELECTIONS = (ROOT_SELECTION_FIRST, ROOT_SELECTION_STRICT)


@dataclass
class AWSConfig:
    """AWS Organizations client configuration."""

    region: str = "us-east-1"
    endpoint_url: Optional[str] = None
    max_attempts: int = 3  # botocore transport retries
    connect_timeout: int = 10  # seconds
    read_timeout: int = 30  # seconds

    @classmethod
    def from_env(cls):
        """Load from environment variables."""
        region = os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION") or "us-east-1"
        return cls(
            region=region,
            endpoint_url=os.getenv("ORGANIZATIONS_ENDPOINT_URL") or None,
            max_attempts=int(os.getenv("AWS_MAX_ATTEMPTS", "3")),
            connect_timeout=int(os.getenv("AWS_CONNECT_TIMEOUT", "10")),
            read_timeout=int(os.getenv("AWS_READ_TIMEOUT", "30")),
        )


@dataclass
class HandlerConfig:
    """Reconciler configuration."""

    type_name: str = DEFAULT_TYPE_NAME
    log_level: str = "INFO"
    # "first" picks the first listed root, "strict" rejects multiple roots
    root_selection: str = ROOT_SELECTION_FIRST

    def __post_init__(self):
        if self.root_selection not in ROOT_SELECTIONS:
            raise ValueError(
                f"root_selection must be one of {', '.join(ROOT_SELECTIONS)}, "
                f"got '{self.root_selection}'"
            )

    @classmethod
    def from_env(cls):
        """Load from environment variables."""
        return cls(
            type_name=os.getenv("TYPE_NAME", DEFAULT_TYPE_NAME),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            root_selection=os.getenv("ROOT_SELECTION", ROOT_SELECTION_FIRST).lower(),
        )


@dataclass
class Config:
    """Main configuration object."""

    aws: AWSConfig
    handler: HandlerConfig

    @classmethod
    def from_env(cls):
        """Load all configuration from environment variables."""
        return cls(
            aws=AWSConfig.from_env(),
            handler=HandlerConfig.from_env(),
        )

    @classmethod
    def default(cls):
        """Return default configuration."""
        return cls(
            aws=AWSConfig(),
            handler=HandlerConfig(),
        )


# Global config instance
config: Optional[Config] = None


def load_config() -> Config:
    """Load configuration (singleton pattern)."""
    global config
    if config is None:
        config = Config.from_env()
    return config


def get_config() -> Config:
    """Get the current configuration."""
    if config is None:
        return load_config()
    return config


def reset_config() -> None:
    """Reset configuration (mainly for testing)."""
    global config
    config = None
