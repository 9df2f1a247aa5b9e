import base64
from pathlib import PurePosixPath
from urllib.parse import urljoin, urlparse

import httpx

from altseo.generation.exceptions import ImageLoadError

_MIME_BY_EXTENSION = {
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
}
_DEFAULT_MIME = "image/jpeg"
_USER_AGENT = "altseo/1.0"


def mime_type_for(url: str) -> str:
    """Guess the image MIME type from the URL's extension, JPEG by default."""
    suffix = PurePosixPath(urlparse(url).path).suffix.lower()
    return _MIME_BY_EXTENSION.get(suffix, _DEFAULT_MIME)


class ImageLoader:
    """Downloads images and encodes them as data URLs for vision prompts."""

    def __init__(
        self,
        *,
        max_bytes: int,
        timeout_seconds: int,
        base_url: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._max_bytes = max_bytes
        self._base_url = base_url
        self._client = client or httpx.Client(
            timeout=timeout_seconds,
            follow_redirects=True,
            headers={"User-Agent": _USER_AGENT},
        )

    def resolve(self, src: str) -> str | None:
        """Absolute URL for src, or None when it cannot be fetched.

        Relative paths are joined onto base_url when one is configured.
        """
        src = src.strip()
        if not src:
            return None
        parsed = urlparse(src)
        if parsed.scheme in ("http", "https") and parsed.netloc:
            return src
        if self._base_url and src.startswith(("/", "./", "../")):
            return urljoin(self._base_url, src)
        return None

    def load_data_url(self, url: str) -> str:
        """Fetch url and return a base64 data URL.

        Raises:
            ImageLoadError: on transport errors, non-200 responses, empty or
                oversized bodies, or content that is not an image.
        """
        try:
            with self._client.stream("GET", url) as response:
                if response.status_code != 200:
                    raise ImageLoadError(f"Image {url} returned HTTP {response.status_code}")
                content_type = response.headers.get("content-type", "").split(";")[0].strip()
                if content_type and not content_type.startswith("image/"):
                    raise ImageLoadError(f"{url} is not an image ({content_type})")
                body = self._read_capped(response, url)
        except httpx.HTTPError as exc:
            raise ImageLoadError(f"Failed to download image {url}: {exc}") from exc

        if not body:
            raise ImageLoadError(f"Image {url} is empty")

        encoded = base64.b64encode(body).decode("ascii")
        return f"data:{mime_type_for(url)};base64,{encoded}"

    def _read_capped(self, response: httpx.Response, url: str) -> bytes:
        """Read the body, giving up as soon as it passes max_bytes."""
        declared = response.headers.get("content-length", "")
        if declared.isdigit() and int(declared) > self._max_bytes:
            raise ImageLoadError(
                f"Image {url} is {declared} bytes, limit is {self._max_bytes}"
            )

        body = bytearray()
        for chunk in response.iter_bytes():
            body.extend(chunk)
            if len(body) > self._max_bytes:
                raise ImageLoadError(
                    f"Image {url} is at least {len(body)} bytes, limit is {self._max_bytes}"
                )
        return bytes(body)

    def close(self) -> None:
        self._client.close()
