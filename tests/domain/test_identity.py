"""Tests for domain/identity.py — user ↔ ticket channel mapping."""

from conftest import OTHER_CATEGORY_ID, USER_ID, add_channel, ticket_channel

from modmail.domain.identity import (
    find_ticket_channel,
    find_ticket_channels,
    is_ticket_channel,
    ticket_owner,
)
from modmail.domain.mirror import Mirror


class TestFindTicketChannel:
    def test_empty_mirror_is_no_match(self, workspace):
        assert find_ticket_channel(Mirror(), workspace, USER_ID) is None

    def test_no_match(self, mirror, workspace):
        assert find_ticket_channel(mirror, workspace, USER_ID) is None

    def test_match(self, mirror, workspace):
        add_channel(mirror, ticket_channel(50))
        assert find_ticket_channel(mirror, workspace, USER_ID) == 50

    def test_topic_must_hold_only_the_id(self, mirror, workspace):
        add_channel(mirror, ticket_channel(51, topic=f"user {USER_ID}"))
        add_channel(mirror, ticket_channel(52, topic=f"{USER_ID}\u00b2"))
        assert find_ticket_channel(mirror, workspace, USER_ID) is None

    def test_padded_topic_agrees_with_owner(self, mirror, workspace):
        channel = add_channel(mirror, ticket_channel(50, topic=f" {USER_ID} \n"))
        assert ticket_owner(channel) == USER_ID
        assert find_ticket_channel(mirror, workspace, USER_ID) == 50

    def test_other_category_ignored(self, mirror, workspace):
        add_channel(mirror, ticket_channel(50, parent_id=OTHER_CATEGORY_ID))
        assert find_ticket_channel(mirror, workspace, USER_ID) is None

    def test_other_user_ignored(self, mirror, workspace):
        add_channel(mirror, ticket_channel(50, user_id=USER_ID + 1))
        assert find_ticket_channel(mirror, workspace, USER_ID) is None

    def test_last_observed_wins(self, mirror, workspace):
        add_channel(mirror, ticket_channel(60))
        add_channel(mirror, ticket_channel(50))
        assert find_ticket_channels(mirror, workspace, USER_ID) == [60, 50]
        assert find_ticket_channel(mirror, workspace, USER_ID) == 50


class TestTicketChannelHelpers:
    def test_is_ticket_channel(self, workspace):
        assert is_ticket_channel(ticket_channel(1), workspace)
        assert not is_ticket_channel(ticket_channel(1, parent_id=OTHER_CATEGORY_ID), workspace)
        assert not is_ticket_channel(None, workspace)

    def test_owner(self):
        assert ticket_owner(ticket_channel(1)) == USER_ID

    def test_owner_of_edited_topic(self):
        assert ticket_owner(ticket_channel(1, topic="please help")) is None
        assert ticket_owner(ticket_channel(1, topic="")) is None

    def test_owner_of_non_ascii_digits(self):
        assert ticket_owner(ticket_channel(1, topic="\u00b2")) is None
        assert ticket_owner(ticket_channel(1, topic="\u0664\u0662")) is None
        assert ticket_owner(ticket_channel(1, topic="１２３")) is None
