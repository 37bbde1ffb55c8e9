"""
dailyglow/models/category.py
Category and Mood enumerations with their derived metadata.

Icons and colors are style tokens; the presentation layer maps them to
concrete assets.
"""

from enum import Enum
from typing import List


class Category(str, Enum):
    MOTIVATION = "Motivation"
    LOVE = "Love"
    SELF_LOVE = "Self Love"
    SUCCESS = "Success"
    HEALTH = "Health"
    CONFIDENCE = "Confidence"
    GRATITUDE = "Gratitude"
    PEACE = "Peace"
    RELATIONSHIPS = "Relationships"
    ABUNDANCE = "Abundance"
    CREATIVITY = "Creativity"
    SPIRITUAL = "Spiritual"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def icon(self) -> str:
        return _CATEGORY_ICONS[self]

    @property
    def color(self) -> str:
        return _CATEGORY_COLORS[self]

    @property
    def description(self) -> str:
        return _CATEGORY_DESCRIPTIONS[self]


_CATEGORY_ICONS = {
    Category.MOTIVATION: "flame.fill",
    Category.LOVE: "heart.fill",
    Category.SELF_LOVE: "heart.fill",
    Category.SUCCESS: "star.fill",
    Category.HEALTH: "heart.circle.fill",
    Category.CONFIDENCE: "person.fill.checkmark",
    Category.GRATITUDE: "hands.sparkles.fill",
    Category.PEACE: "leaf.fill",
    Category.RELATIONSHIPS: "person.2.fill",
    Category.ABUNDANCE: "sparkles",
    Category.CREATIVITY: "paintbrush.fill",
    Category.SPIRITUAL: "moon.stars.fill",
}

_CATEGORY_COLORS = {
    Category.MOTIVATION: "moodEnergized",
    Category.LOVE: "categoryLove",
    Category.SELF_LOVE: "categoryLove",
    Category.SUCCESS: "categorySuccess",
    Category.HEALTH: "categoryHealth",
    Category.CONFIDENCE: "categoryConfidence",
    Category.GRATITUDE: "categoryGratitude",
    Category.PEACE: "categoryPeace",
    Category.RELATIONSHIPS: "accentPink",
    Category.ABUNDANCE: "premiumGold",
    Category.CREATIVITY: "accentPurple",
    Category.SPIRITUAL: "spiritualViolet",
}

_CATEGORY_DESCRIPTIONS = {
    Category.MOTIVATION: "Ignite your inner fire and drive",
    Category.LOVE: "Embrace self-love and acceptance",
    Category.SELF_LOVE: "Embrace self-love and acceptance",
    Category.SUCCESS: "Attract achievement and prosperity",
    Category.HEALTH: "Nurture your body and wellness",
    Category.CONFIDENCE: "Build unshakeable self-belief",
    Category.GRATITUDE: "Cultivate appreciation and joy",
    Category.PEACE: "Find calm and tranquility",
    Category.RELATIONSHIPS: "Strengthen connections with others",
    Category.ABUNDANCE: "Welcome prosperity and wealth",
    Category.CREATIVITY: "Unlock your creative potential",
    Category.SPIRITUAL: "Connect with your inner wisdom",
}


class Mood(str, Enum):
    ENERGIZED = "Energized"
    CALM = "Calm"
    FOCUSED = "Focused"
    HAPPY = "Happy"
    GRATEFUL = "Grateful"
    CONFIDENT = "Confident"
    PEACEFUL = "Peaceful"
    MOTIVATED = "Motivated"

    @property
    def icon(self) -> str:
        return _MOOD_ICONS[self]

    @property
    def color(self) -> str:
        return _MOOD_COLORS[self]

    @property
    def suggested_categories(self) -> List[Category]:
        return list(_MOOD_SUGGESTIONS[self])


_MOOD_ICONS = {
    Mood.ENERGIZED: "bolt.fill",
    Mood.CALM: "wind",
    Mood.FOCUSED: "eye.fill",
    Mood.HAPPY: "face.smiling.fill",
    Mood.GRATEFUL: "hands.sparkles.fill",
    Mood.CONFIDENT: "star.circle.fill",
    Mood.PEACEFUL: "leaf.fill",
    Mood.MOTIVATED: "flame.fill",
}

_MOOD_COLORS = {
    Mood.ENERGIZED: "moodEnergized",
    Mood.CALM: "moodCalm",
    Mood.FOCUSED: "moodFocused",
    Mood.HAPPY: "moodHappy",
    Mood.GRATEFUL: "moodGrateful",
    Mood.CONFIDENT: "categoryConfidence",
    Mood.PEACEFUL: "categoryPeace",
    Mood.MOTIVATED: "moodEnergized",
}

_MOOD_SUGGESTIONS = {
    Mood.ENERGIZED: (Category.MOTIVATION, Category.SUCCESS, Category.CONFIDENCE),
    Mood.CALM: (Category.PEACE, Category.GRATITUDE, Category.HEALTH),
    Mood.FOCUSED: (Category.SUCCESS, Category.MOTIVATION, Category.CONFIDENCE),
    Mood.HAPPY: (Category.GRATITUDE, Category.LOVE, Category.RELATIONSHIPS),
    Mood.GRATEFUL: (Category.GRATITUDE, Category.ABUNDANCE, Category.LOVE),
    Mood.CONFIDENT: (Category.CONFIDENCE, Category.SUCCESS, Category.MOTIVATION),
    Mood.PEACEFUL: (Category.PEACE, Category.GRATITUDE, Category.HEALTH),
    Mood.MOTIVATED: (Category.MOTIVATION, Category.SUCCESS, Category.ABUNDANCE),
}
