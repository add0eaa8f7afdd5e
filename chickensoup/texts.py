"""
Static UI strings in the two supported languages.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict


class Language(enum.Enum):
    ZH = "zh"
    EN = "en"


@dataclass(frozen=True)
class Texts:
    title: str
    description: str
    start_button: str
    scatter_hint: str
    home_button: str


TEXTS: Dict[Language, Texts] = {
    Language.ZH: Texts(
        title="療育雞湯",
        description=(
            "累了嗎？上次喝雞湯是什麼時候呢？\n"
            "喝雞湯的時候，點一點油滴間的界線，\n"
            "小油滴就會融為一個大油滴，\n"
            "試著把所有油滴都點在一起吧！\n"
            "請慢慢品嘗。"
        ),
        start_button="開始喝雞湯",
        scatter_hint="攪拌一下",
        home_button="回到首頁",
    ),
    Language.EN: Texts(
        title="Healing Chicken Soup",
        description=(
            "Tired? When was the last time you had chicken soup?\n"
            "Click the boundaries between droplets to merge them.\n"
            "Let the warmth heal you."
        ),
        start_button="Start Sipping",
        scatter_hint="Stir",
        home_button="Home",
    ),
}

DEFAULT_LANGUAGE = Language.ZH


def texts_for(language: Language) -> Texts:
    return TEXTS[language]
