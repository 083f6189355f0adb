import pytest

from siagajiwa.data_structures.answer_store import AnswerStore, UnknownQuestionError


@pytest.fixture
def store() -> AnswerStore:
    return AnswerStore([1, 2, 3])


def test_later_answer_replaces_earlier_one(store):
    store.record(1, "2")
    store.record(1, "4")
    assert store.get(1) == "4"
    assert len(store) == 1


def test_answer_to_unknown_question_is_rejected(store):
    with pytest.raises(UnknownQuestionError):
        store.record(4, "1")
    assert len(store) == 0


def test_size_never_exceeds_question_count(store):
    for question_id in (1, 2, 3, 1, 2, 3):
        store.record(question_id, "0")
    assert len(store) == store.question_count == 3


def test_snapshot_is_not_affected_by_later_answers(store):
    store.record(1, "A")
    snapshot = store.snapshot()

    store.record(1, "B")
    store.record(2, "C")

    assert dict(snapshot) == {1: "A"}


def test_snapshot_is_read_only(store):
    store.record(1, "A")
    with pytest.raises(TypeError):
        store.snapshot()[1] = "B"  # type: ignore[index]


def test_clear(store):
    store.record(1, "A")
    store.clear()
    assert 1 not in store
    assert store.get(1) is None
    assert len(store) == 0


def test_contains(store):
    store.record(2, "A")
    assert 2 in store
    assert 1 not in store
