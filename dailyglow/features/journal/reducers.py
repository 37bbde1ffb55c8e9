"""
dailyglow/features/journal/reducers.py

Pure deterministic reducers for journal analytics.
All reducers: (entries, now) -> immutable read model. Inputs are never mutated.
"""

from collections import Counter
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Dict, List, Optional, Sequence

from dailyglow.core.clock import calendar_day, ensure_aware, local_time
from dailyglow.models.analytics import (
    AnalyticsWindow,
    FrequencyDataPoint,
    GratitudeDataPoint,
    JournalAnalytics,
    JournalInsight,
    JournalSummary,
    MoodDataPoint,
    WordCount,
)
from dailyglow.models.category import Mood
from dailyglow.models.journal import JournalEntry

# Numeric scale for mood charts (higher = more activated)
MOOD_VALUES: Dict[Mood, float] = {
    Mood.ENERGIZED: 5.0,
    Mood.MOTIVATED: 4.5,
    Mood.HAPPY: 4.5,
    Mood.GRATEFUL: 4.0,
    Mood.CONFIDENT: 4.0,
    Mood.CALM: 3.5,
    Mood.FOCUSED: 3.0,
    Mood.PEACEFUL: 2.5,
}

_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def _sorted_by_date(entries: Sequence[JournalEntry]) -> List[JournalEntry]:
    # sorted() is stable, so same-timestamp entries keep insertion order
    return sorted(entries, key=lambda e: ensure_aware(e.date))


def _first_most_common(items: Sequence) -> Optional[object]:
    """Most frequent item; ties go to the first one seen."""
    if not items:
        return None
    counts = Counter(items)
    best = max(counts.values())
    for item in items:
        if counts[item] == best:
            return item
    return None


def filter_by_window(
    entries: Sequence[JournalEntry],
    window_days: Optional[int],
    now: Optional[datetime] = None,
) -> List[JournalEntry]:
    """Entries on or after `now - window_days`; None means all time."""
    if window_days is None:
        return _sorted_by_date(entries)
    now = ensure_aware(now or datetime.now(timezone.utc))
    cutoff = now - timedelta(days=window_days)
    return _sorted_by_date([e for e in entries if ensure_aware(e.date) >= cutoff])


def mood_trend(entries: Sequence[JournalEntry], tz: Optional[tzinfo] = None) -> List[MoodDataPoint]:
    by_day: Dict[date, List[Mood]] = {}
    for entry in _sorted_by_date(entries):
        if entry.mood is None:
            continue
        by_day.setdefault(calendar_day(entry.date, tz), []).append(entry.mood)

    points = []
    for day in sorted(by_day):
        moods = by_day[day]
        average = sum(MOOD_VALUES[m] for m in moods) / len(moods)
        points.append(MoodDataPoint(day=day, value=average, mood=_first_most_common(moods)))
    return points


def frequency_series(
    entries: Sequence[JournalEntry],
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> List[FrequencyDataPoint]:
    """Zero-filled daily counts from the first entry's day through today."""
    if not entries:
        return []
    counts = Counter(calendar_day(e.date, tz) for e in entries)
    start = min(counts)
    end = max(calendar_day(now or datetime.now(timezone.utc), tz), max(counts))

    series = []
    day = start
    while day <= end:
        series.append(FrequencyDataPoint(day=day, count=counts.get(day, 0)))
        day += timedelta(days=1)
    return series


def gratitude_series(entries: Sequence[JournalEntry]) -> List[GratitudeDataPoint]:
    return [GratitudeDataPoint(date=e.date, count=len(e.gratitude)) for e in _sorted_by_date(entries)]


def longest_consecutive_day_streak(entries: Sequence[JournalEntry], tz: Optional[tzinfo] = None) -> int:
    days = sorted({calendar_day(e.date, tz) for e in entries})
    if not days:
        return 0

    longest = current = 1
    for previous, day in zip(days, days[1:]):
        if (day - previous).days == 1:
            current += 1
            longest = max(longest, current)
        else:
            current = 1
    return longest


def word_frequency(
    entries: Sequence[JournalEntry],
    min_length: int = 5,
    top_n: int = 20,
) -> List[WordCount]:
    """Top words of at least `min_length` characters; ties alphabetical.

    The bound is inclusive: the default of 5 keeps the same words as a
    "longer than 4 characters" rule.
    """
    counts: Counter = Counter()
    for entry in entries:
        counts.update(token for token in entry.content.lower().split() if len(token) >= min_length)
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [WordCount(word=word, count=count) for word, count in ranked[:top_n]]


def most_common_mood(entries: Sequence[JournalEntry]) -> Optional[Mood]:
    return _first_most_common([e.mood for e in _sorted_by_date(entries) if e.mood is not None])


def summary_statistics(entries: Sequence[JournalEntry], tz: Optional[tzinfo] = None) -> JournalSummary:
    ordered = _sorted_by_date(entries)
    if not ordered:
        return JournalSummary(total_entries=0, average_word_count=0, unique_tag_count=0, total_gratitude_items=0)

    local = [local_time(e.date, tz) for e in ordered]
    weekday = _first_most_common([_WEEKDAYS[moment.weekday()] for moment in local])
    hour = _first_most_common([moment.hour for moment in local])

    return JournalSummary(
        total_entries=len(ordered),
        average_word_count=sum(e.word_count for e in ordered) // len(ordered),
        most_active_weekday=weekday,
        most_active_hour_range=f"{hour}:00 - {hour + 1}:00",
        unique_tag_count=len({tag for e in ordered for tag in e.tags}),
        total_gratitude_items=sum(len(e.gratitude) for e in ordered),
    )


def journal_insights(entries: Sequence[JournalEntry], tz: Optional[tzinfo] = None) -> List[JournalInsight]:
    insights: List[JournalInsight] = []

    dominant = most_common_mood(entries)
    if dominant is not None:
        insights.append(JournalInsight(key="dominant_mood", title="Dominant Mood", value=dominant.value))

    count = len(entries)
    weeks = max(1, count // 7)
    insights.append(JournalInsight(key="avg_per_week", title="Avg per Week", value=f"{count // weeks} entries"))

    gratitude_total = sum(len(e.gratitude) for e in entries)
    insights.append(JournalInsight(key="gratitude_items", title="Gratitude Items", value=str(gratitude_total)))

    streak = longest_consecutive_day_streak(entries, tz)
    insights.append(JournalInsight(key="longest_streak", title="Longest Streak", value=f"{streak} days"))
    return insights


def reduce_journal_analytics(
    entries: Sequence[JournalEntry],
    window: AnalyticsWindow = AnalyticsWindow.MONTH,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
    *,
    min_word_length: int = 5,
    top_words: int = 20,
) -> JournalAnalytics:
    """
    Reduce journal entries to every chart and statistic for one window.

    Pure function: same entries + same now => identical output.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    now = ensure_aware(now)

    selected = filter_by_window(entries, window.days, now)
    return JournalAnalytics(
        window=window,
        entry_count=len(selected),
        mood_trend=mood_trend(selected, tz),
        frequency=frequency_series(selected, now, tz),
        gratitude=gratitude_series(selected),
        words=word_frequency(selected, min_length=min_word_length, top_n=top_words),
        longest_streak=longest_consecutive_day_streak(selected, tz),
        summary=summary_statistics(selected, tz),
        insights=journal_insights(selected, tz),
        computed_at=now,
    )
