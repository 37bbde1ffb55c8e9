"""
dailyglow/tests/test_journal_reducers.py

Tests for journal analytics reducers.
"""

from datetime import datetime, timedelta, timezone

import pytest

from dailyglow.features.journal.reducers import (
    filter_by_window,
    frequency_series,
    gratitude_series,
    journal_insights,
    longest_consecutive_day_streak,
    mood_trend,
    most_common_mood,
    reduce_journal_analytics,
    summary_statistics,
    word_frequency,
)
from dailyglow.models.analytics import AnalyticsWindow
from dailyglow.models.category import Mood
from dailyglow.models.journal import JournalEntry


def entry(year, month, day, hour=9, minute=0, **fields):
    return JournalEntry(date=datetime(year, month, day, hour, minute, tzinfo=timezone.utc), **fields)


@pytest.fixture
def january_entries():
    return [
        entry(2024, 1, 1, mood=Mood.ENERGIZED, content="Morning walk felt wonderful", gratitude=["sun", "coffee"]),
        entry(2024, 1, 2, mood=Mood.ENERGIZED, content="Finished the project early", tags=["work"]),
        entry(2024, 1, 3, mood=Mood.CALM, content="Quiet evening reading", tags=["home", "work"], gratitude=["books"]),
    ]


class TestMoodTrend:
    def test_daily_points(self, january_entries):
        points = mood_trend(january_entries)
        assert [p.value for p in points] == [5.0, 5.0, 3.5]
        assert [p.mood for p in points] == [Mood.ENERGIZED, Mood.ENERGIZED, Mood.CALM]

    def test_same_day_entries_are_averaged(self):
        entries = [
            entry(2024, 1, 1, 8, mood=Mood.ENERGIZED),
            entry(2024, 1, 1, 20, mood=Mood.PEACEFUL),
        ]
        points = mood_trend(entries)
        assert len(points) == 1
        assert points[0].value == pytest.approx(3.75)
        # Ties go to the earliest mood of the day
        assert points[0].mood == Mood.ENERGIZED

    def test_entries_without_mood_are_skipped(self):
        entries = [entry(2024, 1, 1), entry(2024, 1, 2, mood=Mood.FOCUSED)]
        points = mood_trend(entries)
        assert [(p.day.isoformat(), p.value) for p in points] == [("2024-01-02", 3.0)]

    def test_input_order_does_not_matter(self, january_entries):
        assert mood_trend(list(reversed(january_entries))) == mood_trend(january_entries)


class TestLongestStreak:
    def test_gap_splits_runs(self):
        entries = [entry(2024, 1, d) for d in (1, 3, 4, 5)]
        assert longest_consecutive_day_streak(entries) == 3

    def test_empty(self):
        assert longest_consecutive_day_streak([]) == 0

    def test_multiple_entries_same_day_count_once(self):
        entries = [entry(2024, 1, 1, 8), entry(2024, 1, 1, 20), entry(2024, 1, 2)]
        assert longest_consecutive_day_streak(entries) == 2


class TestWordFrequency:
    def test_empty_input(self):
        assert word_frequency([]) == []

    def test_short_words_are_dropped(self):
        entries = [JournalEntry(content="I feel happy today and happy again")]
        words = word_frequency(entries)
        assert [(w.word, w.count) for w in words] == [("happy", 2), ("again", 1), ("today", 1)]

    def test_case_folded_and_ties_alphabetical(self):
        entries = [JournalEntry(content="Grateful grateful peace music zebra")]
        assert [w.word for w in word_frequency(entries)] == ["grateful", "music", "peace", "zebra"]

    def test_top_n(self):
        entries = [JournalEntry(content=" ".join(f"word{i:02d}" for i in range(30)))]
        assert len(word_frequency(entries, top_n=20)) == 20


class TestFrequencyAndGratitude:
    def test_frequency_zero_fills_through_now(self):
        entries = [entry(2024, 1, 1), entry(2024, 1, 3), entry(2024, 1, 3, 18)]
        now = datetime(2024, 1, 4, 12, tzinfo=timezone.utc)
        series = frequency_series(entries, now)
        assert [(p.day.day, p.count) for p in series] == [(1, 1), (2, 0), (3, 2), (4, 0)]

    def test_frequency_empty(self):
        assert frequency_series([]) == []

    def test_gratitude_counts_in_date_order(self, january_entries):
        assert [p.count for p in gratitude_series(list(reversed(january_entries)))] == [2, 0, 1]


class TestWindowFilter:
    def test_window_cutoff(self, fixed_now):
        entries = [
            JournalEntry(date=fixed_now - timedelta(days=3)),
            JournalEntry(date=fixed_now - timedelta(days=8)),
        ]
        assert len(filter_by_window(entries, 7, fixed_now)) == 1
        assert len(filter_by_window(entries, None, fixed_now)) == 2

    def test_window_days(self):
        assert AnalyticsWindow.WEEK.days == 7
        assert AnalyticsWindow.THREE_MONTHS.days == 90
        assert AnalyticsWindow.ALL.days is None


class TestSummary:
    def test_summary_statistics(self):
        entries = [
            entry(2024, 1, 1, 9, 15, content="one two three four", tags=["a"], gratitude=["x"]),
            entry(2024, 1, 2, 9, 45, content="one two", tags=["a", "b"]),
            entry(2024, 1, 8, 14, content="one two three", gratitude=["y", "z"]),
        ]
        summary = summary_statistics(entries)
        assert summary.total_entries == 3
        assert summary.average_word_count == 3
        assert summary.most_active_weekday == "Monday"
        assert summary.most_active_hour_range == "9:00 - 10:00"
        assert summary.unique_tag_count == 2
        assert summary.total_gratitude_items == 3

    def test_empty_summary(self):
        summary = summary_statistics([])
        assert summary.total_entries == 0
        assert summary.most_active_weekday is None

    def test_most_common_mood(self, january_entries):
        assert most_common_mood(january_entries) == Mood.ENERGIZED
        assert most_common_mood([]) is None

    def test_insights(self, january_entries):
        insights = {i.key: i.value for i in journal_insights(january_entries)}
        assert insights == {
            "dominant_mood": "Energized",
            "avg_per_week": "3 entries",
            "gratitude_items": "3",
            "longest_streak": "3 days",
        }


class TestReduceJournalAnalytics:
    def test_deterministic(self, january_entries):
        now = datetime(2024, 1, 10, tzinfo=timezone.utc)
        first = reduce_journal_analytics(january_entries, AnalyticsWindow.MONTH, now)
        second = reduce_journal_analytics(january_entries, AnalyticsWindow.MONTH, now)
        assert first.model_dump_json() == second.model_dump_json()
        assert first.computed_at == now

    def test_window_limits_entries(self, january_entries):
        now = datetime(2024, 1, 10, tzinfo=timezone.utc)
        week = reduce_journal_analytics(january_entries, AnalyticsWindow.WEEK, now)
        everything = reduce_journal_analytics(january_entries, AnalyticsWindow.ALL, now)
        assert week.entry_count == 1
        assert everything.entry_count == 3
        assert everything.longest_streak == 3

    def test_empty_journal(self, fixed_now):
        result = reduce_journal_analytics([], AnalyticsWindow.YEAR, fixed_now)
        assert result.entry_count == 0
        assert result.mood_trend == []
        assert result.frequency == []
        assert result.words == []
        assert result.longest_streak == 0
