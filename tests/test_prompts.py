import pytest

from prompts import (
    DIFFICULTIES,
    DIFFICULTY_PROFILES,
    build_feedback_prompt,
    build_problem_prompt,
    build_solution_prompt,
)


def test_every_difficulty_has_a_profile():
    assert set(DIFFICULTY_PROFILES) == set(DIFFICULTIES)


def test_profiles_differ_per_difficulty():
    prompts = {d: build_problem_prompt(d) for d in DIFFICULTIES}
    assert len(set(prompts.values())) == 3


def test_easy_is_single_step():
    p = build_problem_prompt("Easy")
    assert "single step" in p
    assert "unit conversion" not in p


def test_hard_requires_multi_step_and_unit_conversion():
    p = build_problem_prompt("Hard")
    assert "multi-step" in p
    assert "unit conversion" in p
    assert "percentages" in p
    assert "single step" not in p


def test_medium_mentions_fractions():
    p = build_problem_prompt("Medium")
    assert "2-3 steps" in p and "fractions" in p


def test_unknown_difficulty_raises():
    with pytest.raises(ValueError):
        build_problem_prompt("Extreme")


def test_solution_prompt_carries_problem_and_answer():
    p = build_solution_prompt("Split 2.7 litres into 5 cups.", 0.54)
    assert "Problem: Split 2.7 litres into 5 cups." in p
    assert "Correct Answer: 0.54" in p
    assert "<calculation> = <result>" in p


def test_feedback_prompt_marks_result():
    wrong = build_feedback_prompt("p", 7, 8, False)
    right = build_feedback_prompt("p", 7, 7, True)
    assert "Result: INCORRECT" in wrong and "User's Answer: 8" in wrong
    assert "Result: CORRECT" in right
    assert "max 3 sentences" in right
