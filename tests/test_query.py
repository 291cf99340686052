import pytest

from core.query import InvalidQuery, page_for, paginate, sort_quests, visible_quests
from core.quests import Quest, QuestStatus, QuestStore
from core.view_state import SortDirection, SortKey, View, ViewState


def make_store(*quests):
    return QuestStore(quests)


def quest(name, difficulty=1, reward="Gold", status=QuestStatus.NOT_STARTED, description=""):
    return Quest(name, description, difficulty, reward, status)


@pytest.fixture
def mixed_store():
    return make_store(
        quest("Gather Herbs", 1, "10 Silver", QuestStatus.NOT_STARTED),
        quest("Slay Dragon", 5, "100 Gold", QuestStatus.ACTIVE),
        quest("Escort Merchant", 3, "50 Gold", QuestStatus.COMPLETED, "to the harbour"),
        quest("Find Cat", 2, "A hug", QuestStatus.ACTIVE),
    )


class TestStatusFilter:
    @pytest.mark.parametrize(
        "view, expected",
        [
            (View.ACTIVE_QUESTS, ["Find Cat", "Slay Dragon"]),
            (View.COMPLETE_QUEST, ["Find Cat", "Slay Dragon"]),
            (View.COMPLETED_QUESTS, ["Escort Merchant"]),
            (View.ACCEPT_QUEST, ["Gather Herbs"]),
            (View.MAIN_MENU, ["Escort Merchant", "Find Cat", "Gather Herbs", "Slay Dragon"]),
            (View.CREATE_QUEST, ["Escort Merchant", "Find Cat", "Gather Herbs", "Slay Dragon"]),
        ],
    )
    def test_view_selects_status(self, mixed_store, view, expected):
        result = visible_quests(mixed_store, ViewState(current_view=view))
        assert [q.name for q in result] == expected


def test_difficulty_filter(mixed_store):
    result = visible_quests(mixed_store, ViewState(difficulty_filter=5))
    assert [q.name for q in result] == ["Slay Dragon"]


class TestSearch:
    def test_case_insensitive_reward_match(self):
        store = make_store(quest("Loot", reward="50 Gold"), quest("Pillage", reward="Silver"))
        result = visible_quests(store, ViewState(search_text="gold"))
        assert [q.name for q in result] == ["Loot"]

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("DRAGON", ["Slay Dragon"]),
            ("harbour", ["Escort Merchant"]),
            ("hug", ["Find Cat"]),
            ("5", ["Escort Merchant", "Slay Dragon"]),
        ],
    )
    def test_matches_any_searchable_field(self, mixed_store, text, expected):
        result = visible_quests(mixed_store, ViewState(search_text=text))
        assert [q.name for q in result] == expected

    def test_filters_combine_with_and(self, mixed_store):
        state = ViewState(current_view=View.ACTIVE_QUESTS, difficulty_filter=2, search_text="cat")
        assert [q.name for q in visible_quests(mixed_store, state)] == ["Find Cat"]

        state = ViewState(current_view=View.COMPLETED_QUESTS, search_text="cat")
        assert visible_quests(mixed_store, state) == []


class TestSort:
    def test_stable_for_equal_names(self):
        b1, a1, a2 = quest("B", 1), quest("A", 1), quest("A", 2)
        result = sort_quests([b1, a1, a2], SortKey.NAME, SortDirection.ASCENDING)
        assert result[0] is a1 and result[1] is a2 and result[2] is b1

    def test_stable_when_descending(self):
        first, second, other = quest("X", 3), quest("Y", 3), quest("Z", 1)
        result = sort_quests([other, first, second], SortKey.DIFFICULTY, SortDirection.DESCENDING)
        assert result == [first, second, other]
        assert result[0] is first

    def test_difficulty_is_numeric(self):
        quests = [quest("a", 5), quest("b", 1), quest("c", 3)]
        result = sort_quests(quests, SortKey.DIFFICULTY, SortDirection.ASCENDING)
        assert [q.difficulty for q in result] == [1, 3, 5]

    def test_text_keys_ignore_case(self):
        quests = [quest("n1", reward="beta"), quest("n2", reward="Alpha"), quest("n3", reward="Gamma")]
        result = sort_quests(quests, SortKey.REWARD, SortDirection.ASCENDING)
        assert [q.reward for q in result] == ["Alpha", "beta", "Gamma"]


class TestPaginate:
    def test_twelve_items_make_three_pages(self):
        quests = [quest(f"Q{i:02d}") for i in range(12)]

        last = paginate(quests, 2, 5)

        assert last.total_pages == 3
        assert [q.name for q in last.items] == ["Q10", "Q11"]
        assert paginate(quests, 0, 5).first_number == 1
        assert last.first_number == 11

    def test_empty_result(self):
        page = paginate([], 0, 5)
        assert page.items == ()
        assert page.total_pages == 0

    def test_page_past_end_is_empty(self):
        page = paginate([quest("a")], 4, 5)
        assert page.items == ()
        assert page.page == 4

    def test_rejects_bad_parameters(self):
        with pytest.raises(InvalidQuery):
            paginate([], 0, 0)
        with pytest.raises(InvalidQuery):
            paginate([], -1, 5)


def test_pipeline_is_pure_and_idempotent(mixed_store):
    state = ViewState(current_view=View.ACTIVE_QUESTS, sort_key=SortKey.REWARD)
    before = list(mixed_store.all())

    first = page_for(mixed_store, state, 5)
    second = page_for(mixed_store, state, 5)

    assert first == second
    assert list(mixed_store.all()) == before
    assert all(any(q is s for s in mixed_store.all()) for q in first.items)


@pytest.mark.parametrize(
    "state",
    [
        ViewState(sort_key="priority"),
        ViewState(sort_direction="sideways"),
        ViewState(difficulty_filter=7),
        ViewState(current_view="inventory"),
    ],
)
def test_malformed_state_raises_invalid_query(mixed_store, state):
    with pytest.raises(InvalidQuery):
        visible_quests(mixed_store, state)
