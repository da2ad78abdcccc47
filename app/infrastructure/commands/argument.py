"""Argument resolution.

An :class:`Argument` turns one declared command parameter into a value,
prompting the invoking user through a :class:`MessageTransport` until the
value validates, the user cancels, the reply window expires or the prompt
limit is reached. Resolution outcomes are reported in
:class:`ArgumentResult`; only configuration problems and lookup failures
raise.

No per-call state lives on the instance, so one Argument can serve any
number of concurrent resolutions.
"""

import math
from typing import Any, List, Optional, Sequence, Union

from infrastructure.commands.models import ArgumentInfo, ArgumentResult, CancelReason
from infrastructure.commands.prompts import (
    CANCEL_KEYWORD,
    FINISH_KEYWORD,
    build_infinite_prompt,
    build_prompt,
)
from infrastructure.commands.registry import TypeRegistry
from infrastructure.commands.types import ArgumentType, is_valid, maybe_await
from infrastructure.logging import get_module_logger
from infrastructure.platforms.models import ChatMessage
from infrastructure.platforms.transport import MessageTransport

logger = get_module_logger()

DEFAULT_WAIT = 30


def _last_line(text: str) -> str:
    lines = [line for line in text.splitlines() if line.strip()]
    return lines[-1] if lines else text


class Argument:
    """A command argument bound to its value type and transport.

    Attributes:
        info: The definition this argument was built from
        key: Key the value is stored under in collector results
        label: Display name used in prompts
        prompt: Question asked when the value is missing
        error: Fixed error text replacing any rejection reason
        type: Resolved value type (None when custom validate/parse are used)
        min: Minimum value, length or duration, per type
        max: Maximum value, length or duration, per type
        default: Literal default or callable producing one
        one_of: Lowercased allow-list of values
        required: Whether an empty value must be prompted for
        infinite: Whether any number of values is accepted
        wait: Seconds to wait for each reply
    """

    def __init__(
        self,
        registry: TypeRegistry,
        transport: MessageTransport,
        info: Union[ArgumentInfo, dict],
        default_wait: float = DEFAULT_WAIT,
    ):
        if isinstance(info, dict):
            info = ArgumentInfo(**info)

        self.info = info
        self.transport = transport
        self.key = info.key
        self.label = info.label or info.key
        self.prompt = info.prompt
        self.error = info.error
        self.type: Optional[ArgumentType] = (
            registry.resolve(info.type) if info.type else None
        )
        self.min = info.min
        self.max = info.max
        self.default = info.default
        self.one_of = info.one_of
        self.required = info.is_required
        self.infinite = info.infinite
        self.wait = info.wait if info.wait is not None else default_wait

    def __repr__(self) -> str:
        type_id = self.type.id if self.type else "custom"
        return f"<Argument key={self.key!r} type={type_id!r}>"

    @property
    def has_default(self) -> bool:
        return self.info.has_default

    @property
    def timeout(self) -> Optional[float]:
        """Reply timeout in seconds, or None when replies are awaited forever."""
        if not self.wait or math.isinf(self.wait):
            return None
        return self.wait

    async def validate(
        self, value: Any, message: ChatMessage, current: Optional[ChatMessage] = None
    ) -> Any:
        """Validate a raw value with the custom validator or the type.

        Rejections are replaced by the fixed ``error`` when one is set, and a
        multi-line reason is reduced to its last line.
        """
        validator = self.info.validator or self.type.validate
        result = await maybe_await(validator(value, message, self, current))

        if not is_valid(result) and self.error:
            return self.error
        if isinstance(result, str):
            return _last_line(result)
        return result

    async def parse(
        self,
        value: Any,
        message: ChatMessage,
        current: Optional[ChatMessage] = None,
        validated: Any = None,
    ) -> Any:
        if self.info.parser is not None:
            return await maybe_await(self.info.parser(value, message, self, current))
        return await maybe_await(
            self.type.parse(value, message, self, current, validated=validated)
        )

    def is_empty(
        self, value: Any, message: ChatMessage, current: Optional[ChatMessage] = None
    ) -> bool:
        if self.info.empty_checker is not None:
            return self.info.empty_checker(value, message, self, current)
        if self.type is not None:
            return self.type.is_empty(value, message, self, current)
        if isinstance(value, (list, tuple)):
            return len(value) == 0
        return not value

    async def resolve_default(self, message: ChatMessage) -> Any:
        """The default value, calling (and awaiting) it when it is callable."""
        if callable(self.default):
            return await maybe_await(self.default(message, self))
        return self.default

    async def _send(
        self, message: ChatMessage, prompt, prompts: List[ChatMessage]
    ) -> None:
        sent = await self.transport.send_prompt(
            message.channel_id, prompt, reply_to=message
        )
        prompts.append(sent)
        logger.info(
            "argument_prompt_sent",
            argument=self.key,
            prompt_count=len(prompts),
            color=prompt.color.value,
        )

    def _cancel(
        self,
        reason: CancelReason,
        prompts: List[ChatMessage],
        answers: List[ChatMessage],
        value: Any = None,
    ) -> ArgumentResult:
        logger.info(
            "argument_resolution_cancelled",
            argument=self.key,
            reason=reason.value,
            prompt_count=len(prompts),
        )
        return ArgumentResult(
            value=value, cancelled=reason, prompts=prompts, answers=answers
        )

    async def obtain(
        self,
        message: ChatMessage,
        value: Union[str, Sequence[str], None] = None,
        prompt_limit: float = math.inf,
    ) -> ArgumentResult:
        """Obtain this argument's value, prompting the user as needed.

        Args:
            message: The message that triggered the command.
            value: Pre-supplied raw value, or a list of values for an
                infinite argument.
            prompt_limit: Maximum number of prompts to send before giving up.

        Returns:
            ArgumentResult: The parsed value, or the reason resolution ended.
        """
        empty = self.is_empty(value, message)
        if empty and not self.required:
            return ArgumentResult(value=await self.resolve_default(message))

        if self.infinite or isinstance(value, (list, tuple)):
            if isinstance(value, str):
                seed = [value]
            elif value:
                seed = list(value)
            else:
                seed = None
            return await self._obtain_infinite(message, seed, prompt_limit)

        prompts: List[ChatMessage] = []
        answers: List[ChatMessage] = []
        current: Optional[ChatMessage] = None
        valid = False if empty else await self.validate(value, message)

        while not is_valid(valid):
            if len(prompts) >= prompt_limit:
                return self._cancel(CancelReason.PROMPT_LIMIT, prompts, answers)

            await self._send(message, build_prompt(self, valid, empty), prompts)

            reply = await self.transport.await_reply(
                message.channel_id, message.author_id, timeout=self.timeout
            )
            if reply is None:
                return self._cancel(CancelReason.TIME, prompts, answers)

            answers.append(reply)
            current = reply
            value = reply.content
            if value.strip().lower() == CANCEL_KEYWORD:
                return self._cancel(CancelReason.USER, prompts, answers)

            empty = self.is_empty(value, message, current)
            valid = False if empty else await self.validate(value, message, current)

        parsed = await self.parse(value, message, current, validated=valid)
        return ArgumentResult(value=parsed, prompts=prompts, answers=answers)

    async def _obtain_infinite(
        self,
        message: ChatMessage,
        seed: Optional[List[str]],
        prompt_limit: float,
    ) -> ArgumentResult:
        """Collect values one slot at a time.

        With a seed, each seeded value fills one slot and resolution ends
        once the last one is resolved. Without one, prompting continues
        until the user finishes or cancels.
        """
        results: List[Any] = []
        prompts: List[ChatMessage] = []
        answers: List[ChatMessage] = []
        index = 0

        while True:
            value = seed[index] if seed and index < len(seed) else None
            current: Optional[ChatMessage] = None
            empty = value is None or self.is_empty(value, message)
            valid = False if empty else await self.validate(value, message)
            attempts = 0

            while not is_valid(valid):
                attempts += 1
                if attempts > prompt_limit:
                    return self._cancel(
                        CancelReason.PROMPT_LIMIT, prompts, answers, value=results
                    )

                if value:
                    await self._send(
                        message, build_infinite_prompt(self, value, valid), prompts
                    )
                elif not results:
                    await self._send(
                        message, build_infinite_prompt(self, None, valid), prompts
                    )

                reply = await self.transport.await_reply(
                    message.channel_id, message.author_id, timeout=self.timeout
                )
                if reply is None:
                    return self._cancel(CancelReason.TIME, prompts, answers)

                answers.append(reply)
                current = reply
                value = reply.content
                keyword = value.strip().lower()

                if keyword == FINISH_KEYWORD:
                    if results:
                        return ArgumentResult(
                            value=results, prompts=prompts, answers=answers
                        )
                    if self.has_default:
                        return ArgumentResult(
                            value=await self.resolve_default(message),
                            prompts=prompts,
                            answers=answers,
                        )
                    return self._cancel(CancelReason.USER, prompts, answers)
                if keyword == CANCEL_KEYWORD:
                    return self._cancel(CancelReason.USER, prompts, answers)

                empty = self.is_empty(value, message, current)
                valid = False if empty else await self.validate(value, message, current)

            results.append(await self.parse(value, message, current, validated=valid))

            if seed:
                index += 1
                if index >= len(seed):
                    return ArgumentResult(value=results, prompts=prompts, answers=answers)
