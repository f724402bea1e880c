"""Runtime configuration for the command line."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .output import OutputDetail, OutputFormat

ENV_OUTPUT = "PORTAUDIT_OUTPUT"
ENV_OUTPUT_DETAIL = "PORTAUDIT_OUTPUT_DETAIL"
ENV_VERBOSE = "PORTAUDIT_VERBOSE"
ENV_SKIP_SANITY = "PORTAUDIT_SKIP_SANITY"

DEFAULT_OUTPUT = OutputFormat.HUMAN
DEFAULT_OUTPUT_DETAIL = OutputDetail.FAIL


@dataclass(frozen=True)
class RuntimeConfig:
    """Computed runtime configuration values."""

    output_format: OutputFormat = DEFAULT_OUTPUT
    output_detail: OutputDetail = DEFAULT_OUTPUT_DETAIL
    verbosity: int = 0
    skip_sanity_check: bool = False


def env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got '{value}'") from exc


def _env_choice(name: str, enum_type, default):
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return enum_type(value.strip().lower())
    except ValueError as exc:
        choices = ", ".join(item.value for item in enum_type)
        raise ValueError(f"{name} must be one of {choices}, got '{value}'") from exc


def load_config(
    *,
    cli_output: Optional[str] = None,
    cli_output_detail: Optional[str] = None,
    cli_verbosity: Optional[int] = None,
    cli_skip_sanity_check: Optional[bool] = None,
) -> RuntimeConfig:
    """Compose runtime configuration; command line values override the environment."""

    output_format = _env_choice(ENV_OUTPUT, OutputFormat, DEFAULT_OUTPUT)
    if cli_output is not None:
        output_format = OutputFormat(cli_output)

    output_detail = _env_choice(ENV_OUTPUT_DETAIL, OutputDetail, DEFAULT_OUTPUT_DETAIL)
    if cli_output_detail is not None:
        output_detail = OutputDetail(cli_output_detail)

    verbosity = _env_int(ENV_VERBOSE, 0)
    if cli_verbosity:
        verbosity = cli_verbosity

    skip_sanity = env_bool(ENV_SKIP_SANITY, False)
    if cli_skip_sanity_check:
        skip_sanity = True

    return RuntimeConfig(
        output_format=output_format,
        output_detail=output_detail,
        verbosity=verbosity,
        skip_sanity_check=skip_sanity,
    )


__all__ = ["RuntimeConfig", "load_config", "env_bool"]
