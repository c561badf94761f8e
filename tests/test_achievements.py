"""Tests for mindping/achievements.py — rule engine and sticky flags."""

from datetime import date, timedelta

import pytest

from mindping.achievements import (
    CATALOG,
    HISTORY_VIEWED,
    LONG_ENTRY_CHARS,
    all_locked,
    grapheme_count,
    load_sticky,
    mark_unlocked,
    recompute,
    save_sticky,
    sticky_flags,
)

from conftest import consecutive_reflections, make_reflection


def unlocked_ids(achievements):
    return {a.id for a in achievements if a.is_unlocked}


def test_catalog_shape():
    achievements = all_locked()
    assert [a.id for a in achievements] == list(range(1, 13))
    assert not unlocked_ids(achievements)
    assert achievements[0].title == "First Step"
    assert achievements[11].title == "Master of Reflection"


def test_empty_history_locks_everything():
    achievements = recompute([])
    assert len(achievements) == 12
    assert unlocked_ids(achievements) == set()


def test_first_reflection():
    assert 1 in unlocked_ids(recompute([make_reflection("2024-01-01", emojis=["\U0001F622"])]))


def test_streak_thresholds():
    assert unlocked_ids(recompute(consecutive_reflections("2024-01-01", 2))) == {1}
    ids = unlocked_ids(recompute(consecutive_reflections("2024-01-01", 3)))
    assert 2 in ids and 3 not in ids
    ids = unlocked_ids(recompute(consecutive_reflections("2024-01-01", 7)))
    assert {2, 3, 7} <= ids and 8 not in ids
    ids = unlocked_ids(recompute(consecutive_reflections("2024-01-01", 30)))
    assert {2, 3, 7, 8} <= ids


def test_rules_three_and_seven_agree():
    for n in (6, 7):
        ids = unlocked_ids(recompute(consecutive_reflections("2024-03-01", n)))
        assert (3 in ids) == (7 in ids)


def test_positive_emoji_counts_occurrences():
    history = [
        make_reflection("2024-01-01", emojis=["\U0001F600", "\U0001F600"]),
        make_reflection("2024-01-05", emojis=["\U0001F60A", "\U0001F622"]),
    ]
    assert 4 not in unlocked_ids(recompute(history))
    history.append(make_reflection("2024-01-09", emojis=["\U0001F60E", "\U0001F970"]))
    assert 4 in unlocked_ids(recompute(history))


def test_text_rules():
    only_text = [make_reflection("2024-01-01", text="  thoughts  ")]
    ids = unlocked_ids(recompute(only_text))
    assert 5 in ids and 6 not in ids

    blank_with_emoji = [make_reflection("2024-01-01", text="   ", emojis=["\U0001F600"])]
    ids = unlocked_ids(recompute(blank_with_emoji))
    assert 5 not in ids and 6 not in ids

    both = [make_reflection("2024-01-01", text="ok", emojis=["\U0001F600"])]
    assert {5, 6} <= unlocked_ids(recompute(both))


def test_emoji_variety():
    four = [make_reflection("2024-01-01", emojis=["a", "b", "c", "d", "a"])]
    assert 9 not in unlocked_ids(recompute(four))
    five = four + [make_reflection("2024-01-02", emojis=["e"])]
    assert 9 in unlocked_ids(recompute(five))


def test_long_entry():
    assert 10 not in unlocked_ids(recompute([make_reflection("2024-01-01", text="x" * 119)]))
    assert 10 in unlocked_ids(recompute([make_reflection("2024-01-01", text="x" * 120)]))


def test_hundred_distinct_days():
    # Every other day: 99 distinct days, no streak beyond 1
    start = date(2023, 1, 1)
    history = [make_reflection((start + timedelta(days=2 * i)).isoformat()) for i in range(99)]
    assert 12 not in unlocked_ids(recompute(history))
    history.append(make_reflection((start + timedelta(days=2 * 99)).isoformat()))
    assert 12 in unlocked_ids(recompute(history))


def test_history_viewed_not_derived_from_history():
    history = consecutive_reflections("2024-01-01", 40, text="x" * 200, emojis=["\U0001F600"])
    assert HISTORY_VIEWED not in unlocked_ids(recompute(history))
    assert HISTORY_VIEWED in unlocked_ids(recompute(history, {HISTORY_VIEWED: True}))


def test_sticky_survives_recompute():
    achievements = mark_unlocked(recompute([]), HISTORY_VIEWED)
    again = recompute([make_reflection("2024-01-01")], sticky_flags(achievements))
    assert unlocked_ids(again) == {1, HISTORY_VIEWED}


def test_mark_unlocked_touches_one_rule():
    before = recompute([make_reflection("2024-01-01")])
    after = mark_unlocked(before, HISTORY_VIEWED)
    assert unlocked_ids(after) == unlocked_ids(before) | {HISTORY_VIEWED}
    assert HISTORY_VIEWED not in unlocked_ids(before)


def test_mark_unlocked_unknown_id():
    with pytest.raises(ValueError, match="Unknown achievement"):
        mark_unlocked(all_locked(), 99)


def test_sticky_persistence(tmp_path):
    path = tmp_path / "achievements.json"
    assert load_sticky(path) == {}
    assert save_sticky(path, {HISTORY_VIEWED: True}) == []
    assert load_sticky(path) == {HISTORY_VIEWED: True}


def test_sticky_corrupt_file(tmp_path):
    path = tmp_path / "achievements.json"
    path.write_text("[1, 2", encoding="utf-8")
    assert load_sticky(path) == {}


def test_catalog_titles_unique_per_id():
    assert len({i for i, _t, _d in CATALOG}) == 12


FAMILY = "\U0001F468\u200d\U0001F469\u200d\U0001F467"  # one grapheme, five code points


def test_long_entry_counts_graphemes():
    assert grapheme_count(FAMILY * 3) == 3
    below = make_reflection("2024-01-01", text=FAMILY * 119)
    assert len(below.text) >= LONG_ENTRY_CHARS
    assert 10 not in unlocked_ids(recompute([below]))
    at = make_reflection("2024-01-01", text=FAMILY * 120)
    assert 10 in unlocked_ids(recompute([at]))
