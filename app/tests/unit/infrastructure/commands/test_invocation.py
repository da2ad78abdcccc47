"""Unit tests for the command invocation helpers."""

import pytest

from infrastructure.commands import (
    ArgumentCollector,
    CancelReason,
    CollectorResult,
    collect_command_arguments,
    describe_cancellation,
)


@pytest.fixture
def collector_factory(registry, transport, awaiting):
    def _factory(args):
        return ArgumentCollector(registry, transport, args, awaiting=awaiting)

    return _factory


@pytest.mark.unit
class TestCollectCommandArguments:
    """Tests for splitting and collecting in one step."""

    @pytest.mark.asyncio
    async def test_last_argument_keeps_remainder(self, collector_factory, message):
        collector = collector_factory(
            [
                {"key": "when", "prompt": "?", "type": "duration"},
                {"key": "text", "prompt": "?", "type": "string"},
            ]
        )

        result = await collect_command_arguments(collector, message, "10m stand up and stretch")

        assert result.values["text"] == "stand up and stretch"
        assert result.values["when"].total_seconds() == 600

    @pytest.mark.asyncio
    async def test_infinite_last_argument_gets_every_token(self, collector_factory, message):
        collector = collector_factory(
            [{"key": "numbers", "prompt": "?", "type": "integer", "infinite": True}]
        )

        result = await collect_command_arguments(collector, message, '1 2 "3"')

        assert result.values == {"numbers": [1, 2, 3]}

    @pytest.mark.asyncio
    async def test_single_quotes_setting(self, collector_factory, message):
        collector = collector_factory(
            [
                {"key": "first", "prompt": "?", "type": "string"},
                {"key": "second", "prompt": "?", "type": "string"},
            ]
        )

        result = await collect_command_arguments(
            collector, message, "'a b' c", allow_single_quotes=False
        )

        assert result.values == {"first": "'a", "second": "b' c"}

    @pytest.mark.asyncio
    async def test_single_quotes_follow_collector(self, registry, transport, message):
        """Without an explicit flag the collector's quote handling applies."""
        collector = ArgumentCollector(
            registry,
            transport,
            [
                {"key": "first", "prompt": "?", "type": "string"},
                {"key": "second", "prompt": "?", "type": "string"},
            ],
            allow_single_quotes=False,
        )

        result = await collect_command_arguments(collector, message, "'a b' c")

        assert result.values == {"first": "'a", "second": "b' c"}

    @pytest.mark.asyncio
    async def test_no_arguments(self, collector_factory, message):
        result = await collect_command_arguments(collector_factory([]), message, "ignored")

        assert result.values == {}
        assert result.cancelled is None


@pytest.mark.unit
class TestDescribeCancellation:
    """Tests for the user-facing cancellation reply."""

    def test_success_has_no_reply(self):
        assert describe_cancellation(CollectorResult(values={"a": 1})) is None

    def test_cancel_without_prompts_is_usage_error(self):
        response = describe_cancellation(
            CollectorResult(cancelled=CancelReason.USER), usage="`remind <when> <text>`"
        )

        assert response.message == (
            "Invalid command usage. The command's accepted format is: `remind <when> <text>`."
        )

    def test_prompt_limit_is_usage_error(self, message_factory):
        result = CollectorResult(
            cancelled=CancelReason.PROMPT_LIMIT, prompts=[message_factory("prompt")]
        )

        assert describe_cancellation(result).message == "Invalid command usage."

    @pytest.mark.parametrize("reason", [CancelReason.USER, CancelReason.TIME])
    def test_user_and_time_cancellations(self, reason, message_factory):
        result = CollectorResult(cancelled=reason, prompts=[message_factory("prompt")])

        response = describe_cancellation(result)

        assert response.message == "Cancelled command."
        assert response.metadata == {"cancelled": reason.value}
