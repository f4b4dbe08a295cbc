"""Synchronous Imgflip API client.

This module provides :class:`ImgflipClient`, a thin wrapper around
:class:`httpx.Client` used by the ``create`` and ``update`` commands:

- :meth:`ImgflipClient.caption` -- ``POST /caption_image`` in simple
  (``text0``/``text1``) or structured (``boxes``) mode.
- :meth:`ImgflipClient.get_memes` -- ``GET /get_memes``.
- :meth:`ImgflipClient.download` -- fetch a generated image to disk.

Requests are never retried. Transport failures map to
:class:`~memey.exceptions.ConnectionError_` and undecodable bodies to
:class:`~memey.exceptions.ResponseParseError`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional
from urllib.parse import urlparse

import httpx

from memey.exceptions import ApiError, ConnectionError_, DownloadError, ResponseParseError
from memey.models import CaptionBox, CaptionRequest, CaptionResult, Credentials, Settings, Template
from memey.output import get_output


def alternating_case(text: Optional[str]) -> str:
    """Return *text* lower-cased with every even-indexed character upper-cased.

    >>> alternating_case("test")
    'TeSt'
    """
    if not text:
        return ""
    return "".join(
        char.upper() if index % 2 == 0 else char
        for index, char in enumerate(text.lower())
    )


def build_caption_request(
    template_id: int,
    top: Optional[str],
    bottom: Optional[str],
    credentials: Credentials,
    structured: bool = False,
) -> CaptionRequest:
    """Assemble a :class:`~memey.models.CaptionRequest` for either mode."""
    request = CaptionRequest(
        template_id=template_id,
        username=credentials.username,
        password=credentials.password,
    )
    if structured:
        request.boxes = [CaptionBox(text=top or ""), CaptionBox(text=bottom or "")]
    else:
        request.text0 = top
        request.text1 = bottom
    return request


class ImgflipClient:
    """HTTP client for the Imgflip API.

    Must be used as a context manager so that the underlying transport is
    opened and closed.

    Args:
        settings: Provides the API base URL and request timeout.

    Example::

        with ImgflipClient(settings) as client:
            result = client.caption(61527, "WHY", "JUST WHY", credentials)
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or Settings()
        self._client: Optional[httpx.Client] = None

    def __enter__(self) -> ImgflipClient:
        self._client = httpx.Client(
            base_url=self._settings.api_url,
            timeout=self._settings.timeout,
            follow_redirects=True,
        )
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # API calls
    # ------------------------------------------------------------------ #

    def caption(
        self,
        template_id: int,
        top: Optional[str],
        bottom: Optional[str],
        credentials: Credentials,
        structured: bool = False,
    ) -> CaptionResult:
        """Caption a template and return the outcome.

        Args:
            template_id: Imgflip template id.
            top: Top text (first box).
            bottom: Bottom text (second box).
            credentials: Account used for the request.
            structured: Send ordered ``boxes`` instead of ``text0``/``text1``
                so the server keeps the exact casing.

        Returns:
            A successful :class:`~memey.models.CaptionResult` with the image
            URL, or a failed one carrying the server's ``error_message``.

        Raises:
            ConnectionError_: On network errors or timeouts.
            ResponseParseError: If the body is not valid JSON.
        """
        request = build_caption_request(template_id, top, bottom, credentials, structured)
        output = get_output()
        output.debug(
            f"POST /caption_image template_id={template_id} "
            f"mode={'structured' if structured else 'simple'}"
        )

        payload = self._send("POST", "/caption_image", data=request.to_form())
        if not payload.get("success"):
            return CaptionResult(success=False, error_message=payload.get("error_message"))

        data = payload.get("data") or {}
        output.debug("Response Got!")
        return CaptionResult(success=True, url=data.get("url"), page_url=data.get("page_url"))

    def get_memes(self) -> list[Template]:
        """Fetch the current template catalog (single request, no pagination).

        Raises:
            ApiError: If the API reports ``success: false``.
            ConnectionError_: On network errors or timeouts.
            ResponseParseError: If the body is not valid JSON.
        """
        get_output().debug("GET /get_memes")
        payload = self._send("GET", "/get_memes")
        if not payload.get("success"):
            raise ApiError(
                f"Fetching templates failed: {payload.get('error_message') or 'unknown error'}"
            )
        memes = (payload.get("data") or {}).get("memes") or []
        return [Template.model_validate(meme) for meme in memes]

    def download(self, url: str, dest_dir: Path) -> Path:
        """Download *url* into *dest_dir*, keeping the URL's file name.

        Raises:
            DownloadError: On any network, HTTP status or filesystem error.
        """
        client = self._require_client()
        name = Path(urlparse(url).path).name or "meme.jpg"
        dest = dest_dir / name
        try:
            dest_dir.mkdir(parents=True, exist_ok=True)
            with client.stream("GET", url) as response:
                response.raise_for_status()
                with open(dest, "wb") as f:
                    for chunk in response.iter_bytes():
                        f.write(chunk)
        except httpx.HTTPStatusError as exc:
            raise DownloadError(
                f"HTTP {exc.response.status_code} downloading {url}"
            ) from exc
        except (httpx.HTTPError, OSError) as exc:
            dest.unlink(missing_ok=True)
            raise DownloadError(f"Failed to download {url}: {exc}") from exc
        get_output().debug(f"Saved image to {dest}")
        return dest

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _require_client(self) -> httpx.Client:
        if self._client is None:
            raise RuntimeError("ImgflipClient must be used as a context manager")
        return self._client

    def _send(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        """Send one request and decode its JSON body.

        The body is decoded regardless of status code: Imgflip reports
        failures in the payload rather than through HTTP status.
        """
        client = self._require_client()
        try:
            response = client.request(method, path, **kwargs)
        except httpx.TimeoutException as exc:
            raise ConnectionError_(
                f"Request timed out after {self._settings.timeout}s: {method} {path}"
            ) from exc
        except httpx.HTTPError as exc:
            raise ConnectionError_(f"Request failed: {method} {path}: {exc}") from exc

        get_output().debug(f"HTTP {response.status_code} {response.reason_phrase or ''}")
        try:
            payload = response.json()
        except ValueError as exc:
            raise ResponseParseError(
                f"Invalid response from {path} (HTTP {response.status_code}): not valid JSON"
            ) from exc
        if not isinstance(payload, dict):
            raise ResponseParseError(f"Unexpected response from {path}: expected a JSON object")
        return payload
