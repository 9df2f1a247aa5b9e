"""Locating images in document HTML and writing generated alt text back."""

import html
import re
from pathlib import PurePosixPath
from urllib.parse import urlparse

from bs4 import BeautifulSoup

_NON_WORD = re.compile(r"[^a-zA-Z0-9_]")
_IMG_TAG = re.compile(r"<img\b[^>]*>", re.IGNORECASE)
# Attribute values may be double-quoted, single-quoted or bare. The lookbehind
# keeps data-alt and data-src from matching.
_SRC_ATTR = re.compile(
    r"""(?<![\w-])src\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'>]+))""", re.IGNORECASE
)
_ALT_ATTR = re.compile(
    r"""(?<![\w-])alt\s*=\s*(?:"[^"]*"|'[^']*'|[^\s"'>]+)""", re.IGNORECASE
)
_IMG_OPEN = re.compile(r"<img", re.IGNORECASE)


def image_key(src: str) -> str:
    """Filename stem of an image URL with every non-word character as '_'.

    Images sharing a key share one generated alt text.
    """
    path = urlparse(src.strip()).path or src.strip()
    stem = PurePosixPath(path).stem
    return _NON_WORD.sub("_", stem)


def is_usable_key(key: str) -> bool:
    return bool(key.strip()) and key != "_"


def find_image_sources(raw_html: str) -> list[str]:
    """Non-empty <img> src values in document order."""
    if not raw_html:
        return []
    soup = BeautifulSoup(raw_html, "html.parser")
    sources = []
    for img in soup.find_all("img"):
        src = (img.get("src") or "").strip()
        if src:
            sources.append(src)
    return sources


def apply_alt_texts(content: str, alt_texts: dict[str, str]) -> str:
    """Set the alt attribute of every <img> whose key has a generated alt text.

    Existing alt attributes are replaced, missing ones are added. Tags are
    rewritten in place so the rest of the markup is left byte-identical.
    """
    if not alt_texts:
        return content

    updated = content
    for match in _IMG_TAG.finditer(content):
        img_tag = match.group(0)
        src = _src_of(img_tag)
        if not src:
            continue
        alt_text = alt_texts.get(image_key(src))
        if alt_text is None:
            continue

        escaped = html.escape(alt_text, quote=True)
        if _ALT_ATTR.search(img_tag):
            new_tag = _ALT_ATTR.sub(lambda _m: f'alt="{escaped}"', img_tag, count=1)
        else:
            new_tag = _IMG_OPEN.sub(lambda _m: f'<img alt="{escaped}"', img_tag, count=1)
        updated = updated.replace(img_tag, new_tag)
    return updated


def _src_of(img_tag: str) -> str:
    match = _SRC_ATTR.search(img_tag)
    if match is None:
        return ""
    return next(value for value in match.groups() if value is not None).strip()
