"""Plain-text extraction from stored document HTML."""

import hashlib
import html
import math
import re

from bs4 import BeautifulSoup, Comment

_STRIP_TAGS = ("script", "style")
_SHORTCODE = re.compile(r"\[mwai_.*?\]")
_NEWLINE_RUNS = re.compile(r"[\r\n]+")
_WHITESPACE = re.compile(r"\s+")
_SENTENCE_END = re.compile(r"(?<=[.?!。．！？])")
# Unicode separators and control characters at either end of a sentence.
_EDGE_CHARS = r"[\s\x00-\x1f\x7f-\x9f\u200b-\u200f\ufeff]"
_EDGE_JUNK = re.compile(rf"^{_EDGE_CHARS}+|{_EDGE_CHARS}+$")

DEFAULT_MAX_TOKENS = 2000


def strip_tags(raw_html: str) -> str:
    """Return the visible text of an HTML fragment.

    Script and style bodies and comments are dropped entirely, entities are
    decoded by the parser.
    """
    if not raw_html or "<" not in raw_html:
        return html.unescape(raw_html or "")

    soup = BeautifulSoup(raw_html, "html.parser")
    for tag_name in _STRIP_TAGS:
        for element in soup.find_all(tag_name):
            element.decompose()
    for comment in soup.find_all(string=lambda t: isinstance(t, Comment)):
        comment.extract()
    return soup.get_text()


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def remove_shortcodes(text: str) -> str:
    return _SHORTCODE.sub("", text)


def clean_text(raw_text: str = "") -> str:
    """Decode entities, strip markup and fold newline runs into one newline."""
    text = strip_tags(html.unescape(raw_text))
    text = _NEWLINE_RUNS.sub("\n", text)
    return text + " "


def clean_sentences(text: str, max_tokens: int = DEFAULT_MAX_TOKENS) -> str:
    """Deduplicate sentences and keep those that fit in the token budget.

    Tokens are estimated as one per four characters. A sentence that would
    overflow the budget is skipped, later shorter ones may still fit.
    """
    seen: set[str] = set()
    kept: list[str] = []
    length = 0

    for sentence in _SENTENCE_END.split(text):
        sentence = _EDGE_JUNK.sub("", sentence)
        if not sentence:
            continue

        digest = hashlib.md5(sentence.encode("utf-8")).hexdigest()  # noqa: S324
        if digest in seen:
            continue

        tokens = math.ceil(len(sentence) / 4)
        if length + tokens > max_tokens:
            continue

        seen.add(digest)
        kept.append(sentence)
        length += tokens

    return _EDGE_JUNK.sub("", " ".join(kept))


def clean_document_text(content: str, max_tokens: int = DEFAULT_MAX_TOKENS) -> str:
    """Full cleanup applied to document content before it reaches the AI provider."""
    text = remove_shortcodes(content)
    text = clean_text(text)
    return clean_sentences(text, max_tokens=max_tokens)
