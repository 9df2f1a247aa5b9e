import unicodedata
from dataclasses import dataclass
from functools import cached_property

from altseo.content.text import collapse_whitespace, strip_tags

DEFAULT_SAMPLE_LENGTH = 1000


@dataclass(frozen=True)
class DetectionSample:
    """Cleaned, truncated text the detector actually looks at."""

    text: str

    @classmethod
    def from_text(cls, raw: str, sample_length: int = DEFAULT_SAMPLE_LENGTH) -> "DetectionSample":
        """Strip markup, normalise to NFC, collapse whitespace and truncate."""
        cleaned = strip_tags(raw or "")
        cleaned = unicodedata.normalize("NFC", cleaned)
        cleaned = collapse_whitespace(cleaned)
        return cls(text=cleaned[:sample_length])

    @cached_property
    def lowered(self) -> str:
        return self.text.lower()

    def __len__(self) -> int:
        return len(self.text)
