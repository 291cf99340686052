"""Tests for the quest entity, its lifecycle and the snapshot format."""

import pytest

from core.quests import (
    CorruptSnapshot,
    IllegalTransition,
    Quest,
    QuestStatus,
    QuestStore,
    ValidationError,
    parse_difficulty,
)


def snapshot(**overrides):
    record = {
        "name": "Slay Dragon",
        "description": "It lives on the mountain.",
        "difficulty": 3,
        "reward": "100 Gold",
        "status": "NotStarted",
    }
    record.update(overrides)
    return record


class TestCreate:
    def test_appends_not_started_quest(self, store):
        first = store.create("Fetch Water", "", 1, "5 Copper")
        second = store.create("Slay Dragon", "Big one", 5, "100 Gold")

        assert store.all() == (first, second)
        assert second.status is QuestStatus.NOT_STARTED

    @pytest.mark.parametrize(
        "name, difficulty, reward, field",
        [
            ("", 3, "Gold", "name"),
            ("   ", 3, "Gold", "name"),
            ("Quest", 0, "Gold", "difficulty"),
            ("Quest", 6, "Gold", "difficulty"),
            ("Quest", True, "Gold", "difficulty"),
            ("Quest", 3, "", "reward"),
        ],
    )
    def test_rejects_invalid_fields(self, store, name, difficulty, reward, field):
        with pytest.raises(ValidationError) as excinfo:
            store.create(name, "desc", difficulty, reward)

        assert excinfo.value.field == field
        assert len(store) == 0

    def test_strips_whitespace(self, store):
        quest = store.create("  Scout  ", " look around ", 2, " Map ")
        assert (quest.name, quest.description, quest.reward) == ("Scout", "look around", "Map")


class TestAdvance:
    def test_follows_lifecycle(self, store):
        quest = store.create("Slay Dragon", "", 3, "100 Gold")

        store.advance(quest, QuestStatus.ACTIVE)
        assert quest.status is QuestStatus.ACTIVE

        store.advance(quest, QuestStatus.COMPLETED)
        assert quest.status is QuestStatus.COMPLETED

    @pytest.mark.parametrize(
        "start, target",
        [
            (QuestStatus.NOT_STARTED, QuestStatus.COMPLETED),
            (QuestStatus.NOT_STARTED, QuestStatus.NOT_STARTED),
            (QuestStatus.ACTIVE, QuestStatus.NOT_STARTED),
            (QuestStatus.ACTIVE, QuestStatus.ACTIVE),
            (QuestStatus.COMPLETED, QuestStatus.ACTIVE),
            (QuestStatus.COMPLETED, QuestStatus.NOT_STARTED),
            (QuestStatus.COMPLETED, QuestStatus.COMPLETED),
        ],
    )
    def test_illegal_moves_leave_status_unchanged(self, start, target):
        quest = Quest("Q", "", 1, "R", start)
        store = QuestStore([quest])

        with pytest.raises(IllegalTransition):
            store.advance(quest, target)
        assert quest.status is start

    def test_rejects_quest_from_another_store(self, store):
        stranger = Quest("Q", "", 1, "R")
        with pytest.raises(IllegalTransition):
            store.advance(stranger, QuestStatus.ACTIVE)
        assert stranger.status is QuestStatus.NOT_STARTED


def test_index_lookup_uses_identity():
    a = Quest("Twin", "", 1, "R")
    b = Quest("Twin", "", 1, "R")
    store = QuestStore([a, b])

    assert store.index_of(b) == 1
    assert store.get(1) is b
    assert store.get(2) is None
    assert store.get(None) is None


def test_snapshot_round_trip_preserves_order_and_fields(store):
    store.create("Slay Dragon", "It lives on the mountain.", 3, "100 Gold")
    store.create("Find Cat", "", 1, "A hug")
    store.advance(store.all()[1], QuestStatus.ACTIVE)

    restored = QuestStore.from_snapshots(store.to_snapshots())

    assert list(restored.all()) == list(store.all())
    assert store.to_snapshots()[1]["status"] == "Active"


def test_decoding_keeps_field_text_exactly():
    original = Quest(" X ", "  padded  ", 2, " R ", QuestStatus.ACTIVE)

    assert Quest.from_snapshot(original.to_snapshot()) == original


class TestFromSnapshot:
    def test_accepts_valid_record(self):
        quest = Quest.from_snapshot(snapshot(status="Completed"))
        assert quest.status is QuestStatus.COMPLETED

    @pytest.mark.parametrize(
        "record",
        [
            snapshot(status="Finished"),
            snapshot(difficulty=9),
            snapshot(difficulty="3"),
            snapshot(name=""),
            snapshot(name="   "),
            snapshot(reward=42),
            snapshot(extra="field"),
            {"name": "x", "difficulty": 1, "reward": "r", "status": "Active"},
            ["not", "a", "record"],
        ],
    )
    def test_rejects_malformed_record(self, record):
        with pytest.raises(CorruptSnapshot):
            Quest.from_snapshot(record)

    def test_store_load_is_all_or_nothing(self):
        with pytest.raises(CorruptSnapshot):
            QuestStore.from_snapshots([snapshot(), snapshot(status="Finished")])


class TestParseDifficulty:
    def test_parses_digits(self):
        assert parse_difficulty(" 4 ") == 4

    @pytest.mark.parametrize("text", ["", "hard", "0", "6", "2.5"])
    def test_rejects_bad_text(self, text):
        with pytest.raises(ValidationError) as excinfo:
            parse_difficulty(text)
        assert excinfo.value.field == "difficulty"
