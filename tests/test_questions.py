"""Tests for mindping/questions.py — deterministic daily prompt."""

from datetime import date, datetime, timedelta, timezone

import pytest

from mindping.questions import PROMPTS, question_for


def test_same_day_different_times():
    morning = datetime(2024, 3, 10, 6, 5, tzinfo=timezone.utc)
    night = datetime(2024, 3, 10, 23, 59, tzinfo=timezone.utc)
    assert question_for(morning) == question_for(night)
    assert question_for(morning) == question_for(date(2024, 3, 10))


def test_question_comes_from_prompt_list():
    day = date(2024, 1, 1)
    for offset in range(60):
        assert question_for(day + timedelta(days=offset)) in PROMPTS


def test_rotation_uses_more_than_one_prompt():
    day = date(2024, 1, 1)
    seen = {question_for(day + timedelta(days=i)) for i in range(60)}
    assert len(seen) > 1


def test_custom_prompt_list():
    assert question_for(date(2024, 1, 1), ["Only one?"]) == "Only one?"


def test_empty_prompt_list():
    with pytest.raises(ValueError, match="empty"):
        question_for(date(2024, 1, 1), [])
