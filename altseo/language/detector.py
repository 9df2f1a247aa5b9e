"""Heuristic natural-language detector.

Three stages run in a fixed order and the first one that reaches a verdict
wins:

1. script ranges: any character inside a non-Latin script range decides the
   language outright (scripts shared by several languages go through a
   short-word vote);
2. statistical scoring: weighted counts of common words, diagnostic
   characters and sub-word patterns per language profile;
3. character frequency: raw diacritic counts for Latin-script languages the
   profiles do not cover.

When no stage is confident the detector answers "English".
"""

import re
from collections.abc import Iterable

from altseo.language.profiles import (
    DEFAULT_LANGUAGE,
    FREQUENCY_CHARS,
    LANGUAGE_CODES,
    LANGUAGE_PROFILES,
    SCRIPT_LANGUAGE_HINTS,
    SCRIPT_RANGES,
    LanguageProfile,
    ScriptLanguageHint,
    ScriptRange,
)
from altseo.language.sample import DEFAULT_SAMPLE_LENGTH, DetectionSample
from altseo.logging.logger import Log

DEFAULT_MIN_TEXT_LENGTH = 5

WORD_WEIGHT = 5
CHAR_WEIGHT = 2
PATTERN_WEIGHT = 1

# A stage's best score must be strictly above this to count as a verdict.
MIN_SCORE = 2

_TOKEN_SEPARATORS = re.compile(r"[\s\d.,;:!?\"'()\[\]{}।॥،؛؟«»\-–—]+")


class _CompiledProfile:
    """Regexes for one profile, built once per detector."""

    def __init__(self, profile: LanguageProfile) -> None:
        self.profile = profile
        self.word_patterns = [
            re.compile(rf"\b{re.escape(word)}\b") for word in profile.words
        ]
        self.sub_word_patterns = [re.compile(pattern) for pattern in profile.patterns]

    def score(self, lowered: str) -> int:
        score = 0
        for pattern in self.word_patterns:
            score += len(pattern.findall(lowered)) * WORD_WEIGHT
        for char in self.profile.chars:
            score += lowered.count(char) * CHAR_WEIGHT
        for pattern in self.sub_word_patterns:
            score += len(pattern.findall(lowered)) * PATTERN_WEIGHT
        return score


class LanguageDetector:
    """Guess the language a piece of text is written in.

    Instances are immutable after construction and safe to share.
    """

    def __init__(
        self,
        min_text_length: int = DEFAULT_MIN_TEXT_LENGTH,
        sample_length: int = DEFAULT_SAMPLE_LENGTH,
        profiles: Iterable[LanguageProfile] | None = None,
        script_ranges: Iterable[ScriptRange] | None = None,
        frequency_chars: Iterable[tuple[str, tuple[str, ...]]] | None = None,
    ) -> None:
        self._min_text_length = max(1, min_text_length)
        self._sample_length = sample_length
        self._profiles = [
            _CompiledProfile(p) for p in (LANGUAGE_PROFILES if profiles is None else profiles)
        ]
        self._script_ranges = tuple(SCRIPT_RANGES if script_ranges is None else script_ranges)
        self._frequency_chars = tuple(
            FREQUENCY_CHARS if frequency_chars is None else frequency_chars
        )

    def detect(self, text: str) -> str:
        """Return the detected language name, "English" when unsure."""
        sample = DetectionSample.from_text(text, self._sample_length)
        if len(sample) < self._min_text_length:
            return DEFAULT_LANGUAGE

        language = self.detect_by_script(sample)
        if language:
            Log.debug(f"Language detected by script: {language}")
            return language

        language = self.detect_by_statistics(sample)
        if language:
            Log.debug(f"Language detected by word statistics: {language}")
            return language

        language = self.detect_by_character_frequency(sample)
        if language:
            Log.debug(f"Language detected by character frequency: {language}")
            return language

        return DEFAULT_LANGUAGE

    def detect_by_script(self, sample: DetectionSample) -> str | None:
        """First script range in table order that any character falls into."""
        for script in self._script_ranges:
            if any(script.matches(char) for char in sample.text):
                hints = SCRIPT_LANGUAGE_HINTS.get(script.name)
                if hints:
                    return self._vote_within_script(sample, hints)
                return script.name
        return None

    def detect_by_statistics(self, sample: DetectionSample) -> str | None:
        scores = self.score_languages(sample)
        return _best_above_threshold(scores)

    def detect_by_character_frequency(self, sample: DetectionSample) -> str | None:
        scores = {
            language: sum(sample.lowered.count(char) for char in chars)
            for language, chars in self._frequency_chars
        }
        return _best_above_threshold(scores)

    def score_languages(self, text: str | DetectionSample) -> dict[str, int]:
        """Stage-two score per profile, in profile order."""
        if isinstance(text, str):
            text = DetectionSample.from_text(text, self._sample_length)
        return {compiled.profile.name: compiled.score(text.lowered) for compiled in self._profiles}

    @staticmethod
    def _vote_within_script(
        sample: DetectionSample,
        hints: tuple[ScriptLanguageHint, ...],
    ) -> str:
        tokens = [t for t in _TOKEN_SEPARATORS.split(sample.text) if t]
        best_language = hints[0].language
        best_count = 0
        for hint in hints:
            words = set(hint.words)
            count = sum(1 for token in tokens if token in words)
            if count > best_count:
                best_language, best_count = hint.language, count
        return best_language

    @staticmethod
    def get_language_code(language_name: str) -> str:
        """ISO 639 code for a detected language name, "en" when unknown."""
        return LANGUAGE_CODES.get(language_name, "en")

    def supported_languages(self) -> list[str]:
        names: list[str] = []
        for script in self._script_ranges:
            names.extend(script.shared_by or (script.name,))
        names.extend(compiled.profile.name for compiled in self._profiles)
        names.extend(language for language, _chars in self._frequency_chars)
        return list(dict.fromkeys(names))


def _best_above_threshold(scores: dict[str, int]) -> str | None:
    """Highest-scoring language, first one on ties, None unless above MIN_SCORE."""
    best_language: str | None = None
    best_score = 0
    for language, score in scores.items():
        if score > best_score:
            best_language, best_score = language, score
    if best_score > MIN_SCORE:
        return best_language
    return None
