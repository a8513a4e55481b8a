"""Kernel settings and logging setup.

Settings are read from INTENT_KERNEL_* environment variables; nested
provider fields use a double underscore, e.g.
INTENT_KERNEL_PROVIDER__MAX_COST_PER_HOUR=30.
"""

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from intent_kernel.models.contract import ProviderOffering

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class KernelSettings(BaseSettings):
    """Process-level configuration for the kernel and its API."""

    model_config = SettingsConfigDict(
        env_prefix="INTENT_KERNEL_",
        env_nested_delimiter="__",
    )

    history_window: int = Field(default=10, ge=1)
    log_level: str = "INFO"
    provider: ProviderOffering = ProviderOffering()


def configure_logging(level: str = "INFO") -> None:
    """Install a root handler if the host application has not."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
