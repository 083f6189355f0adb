import itertools
import random

import pytest

from siagajiwa.data_structures.enums import StressBand
from siagajiwa.scoring.stress import (
    all_questions_answered,
    classify_stress,
    compute_stress_result,
    max_stress_score,
)


@pytest.mark.parametrize(
    "score, expected_band",
    [
        (0, StressBand.LOW),
        (13, StressBand.LOW),
        (14, StressBand.MEDIUM),
        (26, StressBand.MEDIUM),
        (27, StressBand.HIGH),
        (40, StressBand.HIGH),
        (41, StressBand.HIGH),
        (1000, StressBand.HIGH),
        (-5, StressBand.LOW),
    ],
)
def test_classify_stress(score, expected_band):
    assert classify_stress(score) == expected_band


def test_stress_bands_cover_all_scores_without_gaps():
    bands = [classify_stress(score) for score in range(0, 41)]
    assert bands == [StressBand.LOW] * 14 + [StressBand.MEDIUM] * 13 + [StressBand.HIGH] * 14


@pytest.mark.parametrize(
    "answers, expected_score, expected_max_score, expected_band",
    [
        ({1: "2", 2: "3", 3: "4"}, 9, 12, StressBand.LOW),
        ({1: "0", 2: "0"}, 0, 8, StressBand.LOW),
        ({number: "4" for number in range(1, 11)}, 40, 40, StressBand.HIGH),
        ({number: "2" for number in range(1, 11)}, 20, 40, StressBand.MEDIUM),
        ({}, 0, 0, StressBand.LOW),
    ],
)
def test_compute_stress_result(answers, expected_score, expected_max_score, expected_band):
    result = compute_stress_result(answers, question_count=10)
    assert result.score == expected_score
    assert result.max_score == expected_max_score
    assert result.band == expected_band


def test_compute_stress_result_sums_valid_ratings():
    rng = random.Random(42)
    for _ in range(50):
        answered = rng.randint(0, 10)
        answers = {number: str(rng.randint(0, 4)) for number in range(1, answered + 1)}
        result = compute_stress_result(answers, question_count=10)
        assert result.score == sum(int(value) for value in answers.values())
        assert result.max_score == 4 * answered


@pytest.mark.parametrize("malformed_value", ["", "abc", "2.5", " 3", "3 ", "tiga", "4x"])
def test_malformed_ratings_count_as_zero(malformed_value):
    result = compute_stress_result({1: "4", 2: malformed_value}, question_count=10)
    assert result.score == 4
    assert result.max_score == 8


def test_compute_stress_result_does_not_depend_on_answer_order():
    answers = {1: "3", 2: "x", 3: "1", 4: "4"}
    results = {
        compute_stress_result(dict(permutation), question_count=4)
        for permutation in itertools.permutations(answers.items())
    }
    assert len(results) == 1


def test_compute_stress_result_is_idempotent():
    answers = {1: "1", 2: "2", 3: "3"}
    assert compute_stress_result(answers, 3) == compute_stress_result(answers, 3)


def test_stress_percentage_with_zero_maximum_is_zero():
    assert compute_stress_result({}, question_count=10).percentage == 0.0


def test_stress_percentage():
    assert compute_stress_result({1: "4", 2: "2"}, question_count=10).percentage == 75.0


def test_more_answers_than_questions_is_logged(caplog):
    compute_stress_result({1: "1", 2: "1", 3: "1"}, question_count=2)
    assert "3 answers" in caplog.text


@pytest.mark.parametrize("answered_count, expected", [(0, 0), (1, 4), (10, 40), (-1, 0)])
def test_max_stress_score(answered_count, expected):
    assert max_stress_score(answered_count) == expected


@pytest.mark.parametrize(
    "answers, expected",
    [
        ({1: "0", 2: "4"}, True),
        ({1: "0"}, False),
        ({1: "0", 2: ""}, False),
    ],
)
def test_all_questions_answered(answers, expected):
    assert all_questions_answered(answers, question_count=2) is expected


@pytest.mark.parametrize(
    "answers, expected_title",
    [
        ({1: "1"}, "Tingkat stres rendah"),
        ({1: "4", 2: "4", 3: "4", 4: "4"}, "Tingkat stres sedang"),
        ({number: "3" for number in range(1, 11)}, "Tingkat stres tinggi"),
    ],
)
def test_stress_result_texts(answers, expected_title):
    result = compute_stress_result(answers, question_count=10)
    assert result.title == expected_title
    assert result.description.startswith("Anda memiliki tingkat stres")
    assert result.color > 0
