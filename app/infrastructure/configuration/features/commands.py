"""Command argument feature settings."""

import math
from typing import Any, Optional

from pydantic import Field, field_validator

from infrastructure.configuration.base import FeatureSettings


class CommandArgumentSettings(FeatureSettings):
    """Configuration for conversational argument resolution.

    Environment Variables:
        ARGUMENTS_DEFAULT_WAIT: Seconds to wait for a reply to a prompt when
            an argument does not set its own ``wait`` (0 disables the timeout)
        ARGUMENTS_PROMPT_LIMIT: Maximum prompts per argument (unset = unlimited)
        ARGUMENTS_ALLOW_SINGLE_QUOTES: Whether single quotes group words when
            splitting a command's argument string

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        limit = settings.arguments.effective_prompt_limit
        wait = settings.arguments.default_wait
        ```
    """

    default_wait: float = Field(
        default=30,
        alias="ARGUMENTS_DEFAULT_WAIT",
        description="Default prompt timeout in seconds",
    )

    prompt_limit: Optional[int] = Field(
        default=None,
        alias="ARGUMENTS_PROMPT_LIMIT",
        description="Maximum number of prompts per argument",
    )

    allow_single_quotes: bool = Field(
        default=True,
        alias="ARGUMENTS_ALLOW_SINGLE_QUOTES",
        description="Treat single quotes as grouping quotes",
    )

    @field_validator("default_wait")
    @classmethod
    def _validate_default_wait(cls, v: float) -> float:
        if v < 0:
            raise ValueError("ARGUMENTS_DEFAULT_WAIT must be at least 0")
        return v

    @field_validator("prompt_limit", mode="before")
    @classmethod
    def _parse_prompt_limit(cls, v: Optional[Any]) -> Any:
        """Parse ARGUMENTS_PROMPT_LIMIT, treating blank strings as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        if v is not None and int(v) < 0:
            raise ValueError("ARGUMENTS_PROMPT_LIMIT must be at least 0")
        return v

    @property
    def effective_prompt_limit(self) -> float:
        """Prompt limit as a number, with unset meaning unlimited."""
        if self.prompt_limit is None:
            return math.inf
        return self.prompt_limit
