from __future__ import annotations

from typing import Dict, List, Tuple

from dailyglow.models.affirmation import Affirmation
from dailyglow.models.category import Category, Mood


# Static seed catalog grouped by collection (time of day or theme)
AFFIRMATION_CATALOG: Dict[str, List[Tuple[Category, str]]] = {
    "morning": [
        (Category.MOTIVATION, "Today is full of endless possibilities"),
        (Category.MOTIVATION, "I wake up motivated and ready to conquer the day"),
        (Category.SUCCESS, "This morning brings new opportunities for growth"),
        (Category.GRATITUDE, "I am grateful for this beautiful new day"),
        (Category.HEALTH, "My energy is renewed with the sunrise"),
    ],
    "evening": [
        (Category.SUCCESS, "I am proud of all I accomplished today"),
        (Category.PEACE, "Tonight I rest knowing I did my best"),
        (Category.PEACE, "I release today's stress and welcome peaceful sleep"),
        (Category.MOTIVATION, "Tomorrow is another chance to grow"),
        (Category.GRATITUDE, "I am grateful for today's experiences"),
    ],
    "motivational": [
        (Category.MOTIVATION, "I am capable of achieving anything I set my mind to"),
        (Category.MOTIVATION, "Every challenge is an opportunity to grow stronger"),
        (Category.MOTIVATION, "I have the power to create positive change"),
        (Category.MOTIVATION, "My potential is limitless"),
        (Category.MOTIVATION, "I am becoming the best version of myself"),
    ],
    "self_love": [
        (Category.LOVE, "I am worthy of love and respect"),
        (Category.LOVE, "I accept myself completely and unconditionally"),
        (Category.LOVE, "I am enough exactly as I am"),
        (Category.LOVE, "I deserve all the good things life has to offer"),
        (Category.LOVE, "I love and approve of myself"),
    ],
    "success": [
        (Category.SUCCESS, "Success flows to me easily and effortlessly"),
        (Category.SUCCESS, "I attract abundance in all areas of my life"),
        (Category.SUCCESS, "Every day I am moving closer to my goals"),
        (Category.SUCCESS, "I am a magnet for success and prosperity"),
        (Category.SUCCESS, "My success inspires others to achieve their dreams"),
    ],
    "health": [
        (Category.HEALTH, "My body is healthy, strong, and full of energy"),
        (Category.HEALTH, "I make choices that nourish my mind, body, and soul"),
        (Category.HEALTH, "Every cell in my body radiates health and vitality"),
        (Category.HEALTH, "I am grateful for my body and treat it with respect"),
        (Category.HEALTH, "I am becoming healthier and stronger every day"),
    ],
    "confidence": [
        (Category.CONFIDENCE, "I radiate confidence and self-assurance"),
        (Category.CONFIDENCE, "I trust my intuition and make decisions with ease"),
        (Category.CONFIDENCE, "I am comfortable being my authentic self"),
        (Category.CONFIDENCE, "My confidence grows stronger every day"),
        (Category.CONFIDENCE, "I believe in my abilities and express my true self"),
    ],
    "gratitude": [
        (Category.GRATITUDE, "I am grateful for all the blessings in my life"),
        (Category.GRATITUDE, "Gratitude fills my heart and guides my actions"),
        (Category.GRATITUDE, "I appreciate the abundance that surrounds me"),
        (Category.GRATITUDE, "Every day I find new reasons to be thankful"),
        (Category.GRATITUDE, "My life is full of things to be grateful for"),
    ],
    "peace": [
        (Category.PEACE, "Peace flows through me like a gentle river"),
        (Category.PEACE, "I am centered, calm, and at peace"),
        (Category.PEACE, "I release all worries and embrace tranquility"),
        (Category.PEACE, "My mind is clear and my heart is peaceful"),
        (Category.PEACE, "I choose peace over perfection"),
    ],
}

# Mood tag per category, used when seeding records
_CATEGORY_MOOD = {
    Category.MOTIVATION: Mood.MOTIVATED,
    Category.SUCCESS: Mood.FOCUSED,
    Category.CONFIDENCE: Mood.CONFIDENT,
    Category.GRATITUDE: Mood.GRATEFUL,
    Category.LOVE: Mood.HAPPY,
    Category.HEALTH: Mood.ENERGIZED,
    Category.PEACE: Mood.PEACEFUL,
}


def load_seed_pool() -> List[Affirmation]:
    """Build a fresh pool from the static catalog (catalog order preserved)."""
    pool: List[Affirmation] = []
    for collection in AFFIRMATION_CATALOG.values():
        for category, text in collection:
            pool.append(
                Affirmation.create(
                    text,
                    category,
                    mood=_CATEGORY_MOOD.get(category, Mood.CALM),
                )
            )
    return pool
