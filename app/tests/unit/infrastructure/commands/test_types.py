"""Unit tests for the built-in argument value types.

Tests cover:
- ArgumentType id rules and default emptiness
- string, integer, float, boolean validation and parsing
- duration, date and time formats and bounds
- user lookup, disambiguation and Resolved threading
"""

from datetime import timedelta

import arrow
import pytest

from infrastructure.commands.exceptions import InvalidTypeIdError
from infrastructure.commands.types import (
    ArgumentType,
    BooleanArgumentType,
    DateArgumentType,
    DurationArgumentType,
    FloatArgumentType,
    IntegerArgumentType,
    Resolved,
    StringArgumentType,
    TimeArgumentType,
    UserArgumentType,
    disambiguation,
    is_valid,
)
from infrastructure.commands.types.base import choices_message
from infrastructure.commands.types.duration import INVALID_FORMAT, TOO_LONG
from infrastructure.platforms.models import PlatformUser


class EchoType(ArgumentType):
    def validate(self, value, message, argument, current=None):
        return True

    def parse(self, value, message, argument, current=None, validated=None):
        return value


@pytest.mark.unit
class TestArgumentTypeBase:
    """Tests for the ArgumentType base class and helpers."""

    def test_id_must_be_lowercase(self):
        """Uppercase ids are rejected."""
        with pytest.raises(InvalidTypeIdError):
            EchoType("Echo")

    def test_id_must_not_be_empty(self):
        """Empty ids are rejected."""
        with pytest.raises(InvalidTypeIdError):
            EchoType("")

    def test_invalid_type_id_is_value_error(self):
        """Configuration errors are ValueErrors."""
        with pytest.raises(ValueError):
            EchoType("")

    @pytest.mark.parametrize(
        "value,expected",
        [("", True), (None, True), ([], True), ("x", False), (["x"], False)],
    )
    def test_default_is_empty(self, value, expected, message):
        """Falsy values and empty lists are empty."""
        assert EchoType("echo").is_empty(value, message, None) is expected

    def test_is_valid(self):
        """Only True-ish non-string results count as valid."""
        assert is_valid(True)
        assert is_valid(Resolved(None))
        assert not is_valid(False)
        assert not is_valid("reason")
        assert not is_valid("")

    def test_disambiguation_message(self):
        """Ambiguous matches are listed with non-breaking spaces."""
        text = disambiguation(["alice", "alice b"], "users")

        assert text == (
            'Multiple users found, please be more specific: "alice",   "alice\xa0b"'
        )

    def test_choices_message(self):
        """Allowed options are listed in backticks."""
        assert choices_message(["red", "blue"]) == (
            "Please enter one of the following options: `red`, `blue`"
        )


@pytest.mark.unit
class TestStringArgumentType:
    """Tests for the string type."""

    def test_accepts_any_text(self, argument_factory, message):
        argument = argument_factory(type="string")

        assert StringArgumentType().validate("hello", message, argument) is True

    def test_one_of_is_case_insensitive(self, argument_factory, message):
        """Choices match regardless of case."""
        argument = argument_factory(type="string", one_of=["Red", "blue"])
        string = StringArgumentType()

        assert string.validate("RED", message, argument) is True
        assert string.validate("green", message, argument) == (
            "Please enter one of the following options: `red`, `blue`"
        )

    def test_length_bounds(self, argument_factory, message):
        """min/max bound the length."""
        argument = argument_factory(type="string", label="name", min=2, max=4)
        string = StringArgumentType()

        assert string.validate("a", message, argument) == (
            "Please keep the name above or exactly 2 characters."
        )
        assert string.validate("abcde", message, argument) == (
            "Please keep the name below or exactly 4 characters."
        )
        assert string.validate("abcd", message, argument) is True

    def test_parse_returns_text(self, argument_factory, message):
        argument = argument_factory(type="string")

        assert StringArgumentType().parse("Hello", message, argument) == "Hello"


@pytest.mark.unit
class TestNumberArgumentTypes:
    """Tests for the integer and float types."""

    @pytest.mark.parametrize("value", ["abc", "1.5", "", "1e3", "--1"])
    def test_integer_rejects_non_integers(self, value, argument_factory, message):
        argument = argument_factory(type="integer")

        assert IntegerArgumentType().validate(value, message, argument) is False

    @pytest.mark.parametrize("value,expected", [("42", 42), ("-7", -7), ("+3", 3)])
    def test_integer_parses(self, value, expected, argument_factory, message):
        argument = argument_factory(type="integer")
        integer = IntegerArgumentType()

        assert integer.validate(value, message, argument) is True
        assert integer.parse(value, message, argument) == expected

    def test_integer_bounds(self, argument_factory, message):
        """Values outside min/max get a specific reason."""
        argument = argument_factory(type="integer", min=1, max=10)
        integer = IntegerArgumentType()

        assert integer.validate("0", message, argument) == (
            "Please enter a number above or exactly 1."
        )
        assert integer.validate("11", message, argument) == (
            "Please enter a number below or exactly 10."
        )

    def test_integer_one_of(self, argument_factory, message):
        argument = argument_factory(type="integer", one_of=[1, 2])
        integer = IntegerArgumentType()

        assert integer.validate("2", message, argument) is True
        assert integer.validate("3", message, argument).startswith(
            "Please enter one of the following options"
        )

    @pytest.mark.parametrize("value", ["nan", "inf", "-inf", "abc"])
    def test_float_rejects_non_finite(self, value, argument_factory, message):
        argument = argument_factory(type="float")

        assert FloatArgumentType().validate(value, message, argument) is False

    def test_float_parses(self, argument_factory, message):
        argument = argument_factory(type="float")

        assert FloatArgumentType().parse("2.5", message, argument) == 2.5


@pytest.mark.unit
class TestBooleanArgumentType:
    """Tests for the boolean type."""

    @pytest.mark.parametrize("value", ["yes", "Y", "true", "on", "1", "enable"])
    def test_truthy(self, value, argument_factory, message):
        argument = argument_factory(type="boolean")
        boolean = BooleanArgumentType()

        assert boolean.validate(value, message, argument) is True
        assert boolean.parse(value, message, argument) is True

    @pytest.mark.parametrize("value", ["no", "N", "false", "off", "0", "disabled"])
    def test_falsy(self, value, argument_factory, message):
        argument = argument_factory(type="boolean")
        boolean = BooleanArgumentType()

        assert boolean.validate(value, message, argument) is True
        assert boolean.parse(value, message, argument) is False

    def test_unknown_value_invalid(self, argument_factory, message):
        argument = argument_factory(type="boolean")
        boolean = BooleanArgumentType()

        assert boolean.validate("maybe", message, argument) is False
        with pytest.raises(ValueError):
            boolean.parse("maybe", message, argument)


@pytest.mark.unit
class TestDurationArgumentType:
    """Tests for the duration type."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("10s", timedelta(seconds=10)),
            ("5 min", timedelta(minutes=5)),
            ("2.5h", timedelta(hours=2, minutes=30)),
            ("1d", timedelta(days=1)),
            ("2000", timedelta(seconds=2)),
        ],
    )
    def test_parses_formats(self, value, expected, argument_factory, message):
        argument = argument_factory(type="duration")
        duration = DurationArgumentType()

        assert duration.validate(value, message, argument) is True
        assert duration.parse(value, message, argument) == expected

    @pytest.mark.parametrize("value", ["soon", "500ms", "0s", "-5m"])
    def test_rejects_invalid_or_sub_second(self, value, argument_factory, message):
        argument = argument_factory(type="duration")

        assert DurationArgumentType().validate(value, message, argument) == INVALID_FORMAT

    def test_rejects_over_a_year(self, argument_factory, message):
        argument = argument_factory(type="duration")

        assert DurationArgumentType().validate("2y", message, argument) == TOO_LONG

    def test_bounds_in_seconds(self, argument_factory, message):
        """min/max are seconds and reported in short form."""
        argument = argument_factory(type="duration", min=60, max=3600)
        duration = DurationArgumentType()

        assert duration.validate("30s", message, argument) == (
            "Please enter a duration above or exactly 1m."
        )
        assert duration.validate("2h", message, argument) == (
            "Please enter a duration below or exactly 1h."
        )
        assert duration.validate("30m", message, argument) is True


@pytest.mark.unit
class TestDateArgumentType:
    """Tests for the date type."""

    def test_future_date_accepted(self, argument_factory, message):
        argument = argument_factory(type="date")
        target = arrow.utcnow().shift(days=30)
        value = target.format("D/M/YYYY HH:mm") + " +0"

        date = DateArgumentType()

        assert date.validate(value, message, argument) is True
        parsed = date.parse(value, message, argument)
        assert parsed.year == target.year
        assert parsed.month == target.month
        assert parsed.day == target.day

    def test_past_date_rejected(self, argument_factory, message):
        argument = argument_factory(type="date")
        value = arrow.utcnow().shift(days=-30).format("D/M/YYYY HH:mm")

        assert DateArgumentType().validate(value, message, argument) == (
            "Please enter a date that's in the future."
        )

    def test_far_future_rejected(self, argument_factory, message):
        argument = argument_factory(type="date")
        value = arrow.utcnow().shift(years=2).format("D/M/YYYY HH:mm")

        assert DateArgumentType().validate(value, message, argument) == (
            "The max. usable date is `1 year` in the future. Please try again."
        )

    def test_past_allowed_when_not_required_future(self, argument_factory, message):
        argument = argument_factory(type="date")
        value = arrow.utcnow().shift(days=-30).format("D/M/YYYY HH:mm")

        assert DateArgumentType(require_future=False).validate(
            value, message, argument
        ) is True

    @pytest.mark.parametrize("value", ["tomorrow", "31/02/2030 10:00", "99/99"])
    def test_invalid_dates(self, value, argument_factory, message):
        argument = argument_factory(type="date")

        result = DateArgumentType().validate(value, message, argument)

        assert result.startswith("Please enter a valid date format")

    def test_offset_converted_to_utc(self, argument_factory, message):
        """A +2 offset moves the hour back by two in UTC."""
        argument = argument_factory(type="date")
        year = arrow.utcnow().year + 1

        parsed = DateArgumentType(require_future=False).parse(
            f"15/6/{year} 14:00 +2", message, argument
        )

        assert (parsed.hour, parsed.minute) == (12, 0)
        assert parsed.utcoffset() == timedelta(0)


@pytest.mark.unit
class TestTimeArgumentType:
    """Tests for the time type."""

    @pytest.mark.parametrize(
        "value,hour,minute",
        [("18:30 +0", 18, 30), ("5pm +0", 17, 0), ("12 am +0", 0, 0), ("9:15 am -3", 12, 15)],
    )
    def test_parses_times(self, value, hour, minute, argument_factory, message):
        argument = argument_factory(type="time")
        time = TimeArgumentType()

        assert time.validate(value, message, argument) is True
        parsed = time.parse(value, message, argument)
        assert (parsed.hour, parsed.minute) == (hour, minute)

    def test_now_accepted(self, argument_factory, message):
        argument = argument_factory(type="time")

        assert TimeArgumentType().validate("now", message, argument) is True

    @pytest.mark.parametrize("value", ["later", "25/12", "+2"])
    def test_invalid_times(self, value, argument_factory, message):
        argument = argument_factory(type="time")

        assert TimeArgumentType().validate(value, message, argument).startswith(
            "Please enter a valid date format"
        )


@pytest.mark.unit
class TestUserArgumentType:
    """Tests for the user type."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["<@111>", "<@!111>", "<@111|alice>", "111"])
    async def test_mentions_and_ids(self, value, directory, argument_factory, message):
        """Mentions and raw ids are fetched directly."""
        argument = argument_factory(type="user")

        result = await UserArgumentType(directory).validate(value, message, argument)

        assert result == Resolved(directory.users["111"])
        assert directory.search_calls == 0

    @pytest.mark.asyncio
    async def test_unique_name_match(self, directory, argument_factory, message):
        argument = argument_factory(type="user")

        result = await UserArgumentType(directory).validate("Alice A", message, argument)

        assert result.value.id == "111"

    @pytest.mark.asyncio
    async def test_tag_match(self, directory, argument_factory, message):
        argument = argument_factory(type="user")

        result = await UserArgumentType(directory).validate("bob#0042", message, argument)

        assert result.value.id == "333"

    @pytest.mark.asyncio
    async def test_exact_match_wins_over_partial(self, directory, argument_factory, message):
        """An exact name beats partial matches."""
        directory.users["444"] = PlatformUser(id="444", username="alice2")
        argument = argument_factory(type="user")

        result = await UserArgumentType(directory).validate("alice", message, argument)

        assert result.value.id == "111"

    @pytest.mark.asyncio
    async def test_ambiguous_match_lists_candidates(
        self, directory, argument_factory, message
    ):
        argument = argument_factory(type="user")

        result = await UserArgumentType(directory).validate("ali", message, argument)

        assert result == (
            'Multiple users found, please be more specific: "alice",   "alicia"\n'
        )

    @pytest.mark.asyncio
    async def test_too_many_matches(self, directory, argument_factory, message):
        """More than 15 candidates are not listed."""
        directory.users = {
            str(n): PlatformUser(id=str(n), username=f"user{n}") for n in range(16)
        }
        argument = argument_factory(type="user")

        result = await UserArgumentType(directory).validate("user", message, argument)

        assert result == "Multiple users found. Please be more specific."

    @pytest.mark.asyncio
    async def test_no_match(self, directory, argument_factory, message):
        argument = argument_factory(type="user")

        assert await UserArgumentType(directory).validate("carol", message, argument) is False

    @pytest.mark.asyncio
    async def test_one_of_restricts_ids(self, directory, argument_factory, message):
        argument = argument_factory(type="user", one_of=["222"])
        user = UserArgumentType(directory)

        assert await user.validate("alice", message, argument) is False
        assert await user.validate("alicia", message, argument) == Resolved(
            directory.users["222"]
        )

    @pytest.mark.asyncio
    async def test_parse_reuses_resolved_user(self, directory, argument_factory, message):
        """parse never repeats the lookup done by validate."""
        argument = argument_factory(type="user")
        user = UserArgumentType(directory)

        validated = await user.validate("<@333>", message, argument)
        calls = directory.fetch_calls
        parsed = await user.parse("<@333>", message, argument, validated=validated)

        assert parsed is directory.users["333"]
        assert directory.fetch_calls == calls

    @pytest.mark.asyncio
    async def test_parse_without_validation_looks_up(
        self, directory, argument_factory, message
    ):
        argument = argument_factory(type="user")

        parsed = await UserArgumentType(directory).parse("bob", message, argument)

        assert parsed.id == "333"

    @pytest.mark.asyncio
    async def test_lookup_errors_propagate(self, argument_factory, message):
        class BrokenDirectory:
            async def fetch_user(self, user_id):
                raise ConnectionError("directory down")

            async def search_users(self, query, channel_id=None):
                raise ConnectionError("directory down")

        argument = argument_factory(type="user")

        with pytest.raises(ConnectionError):
            await UserArgumentType(BrokenDirectory()).validate("<@1>", message, argument)
