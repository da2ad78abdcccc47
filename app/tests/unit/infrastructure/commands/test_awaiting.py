"""Unit tests for AwaitingRegistry."""

import pytest


@pytest.mark.unit
class TestAwaitingRegistry:
    """Tests for marking users as mid-prompt."""

    def test_add_and_discard(self, awaiting):
        awaiting.add("U1", "C1")

        assert awaiting.is_awaiting("U1", "C1")
        assert ("U1", "C1") in awaiting
        assert len(awaiting) == 1

        awaiting.discard("U1", "C1")

        assert not awaiting.is_awaiting("U1", "C1")
        assert len(awaiting) == 0

    def test_discard_missing_is_noop(self, awaiting):
        awaiting.discard("U1", "C1")

        assert len(awaiting) == 0

    def test_keys_are_per_channel(self, awaiting):
        """A user awaiting in one channel can still run commands elsewhere."""
        awaiting.add("U1", "C1")

        assert not awaiting.is_awaiting("U1", "C2")
        assert not awaiting.is_awaiting("U2", "C1")

    def test_hold_releases_on_exit(self, awaiting):
        with awaiting.hold("U1", "C1"):
            assert awaiting.is_awaiting("U1", "C1")

        assert not awaiting.is_awaiting("U1", "C1")

    def test_hold_releases_on_exception(self, awaiting):
        with pytest.raises(RuntimeError):
            with awaiting.hold("U1", "C1"):
                raise RuntimeError("boom")

        assert len(awaiting) == 0

    def test_should_dispatch(self, awaiting, message_factory):
        """Messages from a user mid-prompt are not dispatched as commands."""
        reply = message_factory("!help", author_id="U1", channel_id="C1")
        elsewhere = message_factory("!help", author_id="U1", channel_id="C2")

        with awaiting.hold("U1", "C1"):
            assert awaiting.should_dispatch(reply) is False
            assert awaiting.should_dispatch(elsewhere) is True

        assert awaiting.should_dispatch(reply) is True

    def test_overlapping_holds_keep_key_until_last_release(self, awaiting):
        """Two collections for the same user and channel each hold the key."""
        with awaiting.hold("U1", "C1"):
            with awaiting.hold("U1", "C1"):
                assert len(awaiting) == 1

            assert awaiting.is_awaiting("U1", "C1")

        assert not awaiting.is_awaiting("U1", "C1")
        assert len(awaiting) == 0

    def test_extra_discard_does_not_go_negative(self, awaiting):
        awaiting.add("U1", "C1")
        awaiting.discard("U1", "C1")
        awaiting.discard("U1", "C1")
        awaiting.add("U1", "C1")

        assert awaiting.is_awaiting("U1", "C1")
