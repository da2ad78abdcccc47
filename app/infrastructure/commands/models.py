"""Command argument data models.

Provides:
- ArgumentInfo: Definition of a single command argument (validated on construction)
- CancelReason: Why a resolution ended without a value
- ArgumentResult: Outcome of resolving one argument
- CollectorResult: Outcome of resolving all of a command's arguments
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from infrastructure.platforms.models import ChatMessage

# Signature shared by custom validators, parsers and empty checkers:
# (value, triggering_message, argument, current_message)
ArgumentChecker = Callable[..., Any]


class CancelReason(str, Enum):
    """Why a resolution ended without a value."""

    USER = "user"
    TIME = "time"
    PROMPT_LIMIT = "promptLimit"


class ArgumentInfo(BaseModel):
    """Definition of a single command argument.

    Either ``type`` or both ``validate`` and ``parse`` must be given. Custom
    ``validate``/``parse``/``is_empty`` callables take precedence over the
    resolved type's methods and may be sync or async.

    Passing ``default`` (even ``None``) makes the argument optional unless
    ``required`` is set explicitly. A callable default is called with the
    triggering message and the argument, and may be async.

    Example:
        ArgumentInfo(
            key="duration",
            prompt="How long should the reminder wait?",
            type="duration",
            max=7 * 24 * 3600,
        )
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    key: str = Field(..., min_length=1, description="Key for the argument")
    label: Optional[str] = Field(
        default=None, description="Display name (defaults to key)"
    )
    prompt: str = Field(..., description="First prompt when the value is missing")
    error: Optional[str] = Field(
        default=None, description="Fixed error shown for any invalid value"
    )
    type: Optional[str] = Field(
        default=None,
        description="Registered type id, or several ids in priority order",
    )
    min: Optional[Union[int, float]] = Field(
        default=None, description="Minimum value, length or duration (per type)"
    )
    max: Optional[Union[int, float]] = Field(
        default=None, description="Maximum value, length or duration (per type)"
    )
    default: Any = Field(default=None, description="Literal value or callable")
    one_of: Optional[List[Union[str, int, float]]] = Field(
        default=None, description="Allowed values (strings compared case-insensitively)"
    )
    required: Optional[bool] = Field(
        default=None, description="Defaults to True unless a default is given"
    )
    infinite: bool = Field(default=False, description="Accept any number of values")
    wait: Optional[float] = Field(
        default=None,
        description="Seconds to wait for each reply (0 disables the timeout)",
    )
    validator: Optional[ArgumentChecker] = Field(default=None, alias="validate")
    parser: Optional[ArgumentChecker] = Field(default=None, alias="parse")
    empty_checker: Optional[ArgumentChecker] = Field(default=None, alias="is_empty")

    @field_validator("type", mode="before")
    @classmethod
    def _join_union_ids(cls, v: Any) -> Any:
        """Accept a list of type ids as a union in priority order."""
        if isinstance(v, (list, tuple)):
            return "|".join(v)
        return v

    @field_validator("one_of", mode="before")
    @classmethod
    def _lowercase_choices(cls, v: Any) -> Any:
        if v is None:
            return v
        return [item.lower() if isinstance(item, str) else item for item in v]

    @field_validator("wait")
    @classmethod
    def _validate_wait(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and math.isnan(v):
            raise ValueError("Argument wait must be a number")
        if v is not None and v < 0:
            raise ValueError("Argument wait must be at least 0")
        return v

    @model_validator(mode="after")
    def _validate_checkers(self) -> "ArgumentInfo":
        if not self.type and (self.validator is None or self.parser is None):
            raise ValueError(
                "Argument must have either a type or both validate and parse"
            )
        return self

    @property
    def has_default(self) -> bool:
        """Whether a default value was explicitly given."""
        return "default" in self.model_fields_set

    @property
    def is_required(self) -> bool:
        if self.required is not None:
            return self.required
        return not self.has_default


@dataclass
class ArgumentResult:
    """Result of obtaining a single argument's value(s).

    Attributes:
        value: Final value (a list for infinite arguments), None when cancelled
        cancelled: None on success, otherwise the cancellation reason
        prompts: Messages that were sent to prompt the user
        answers: The user's messages that answered a prompt
    """

    value: Any = None
    cancelled: Optional[CancelReason] = None
    prompts: List[ChatMessage] = field(default_factory=list)
    answers: List[ChatMessage] = field(default_factory=list)

    @property
    def is_cancelled(self) -> bool:
        return self.cancelled is not None


@dataclass
class CollectorResult:
    """Result of obtaining values for every argument of a command.

    Attributes:
        values: Final values mapped by argument key, None when cancelled
        cancelled: None on success, otherwise the cancellation reason
        prompts: Messages sent to prompt the user, across all arguments
        answers: The user's answers, across all arguments
    """

    values: Optional[Dict[str, Any]] = None
    cancelled: Optional[CancelReason] = None
    prompts: List[ChatMessage] = field(default_factory=list)
    answers: List[ChatMessage] = field(default_factory=list)

    @property
    def is_cancelled(self) -> bool:
        return self.cancelled is not None
