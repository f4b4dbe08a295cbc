"""Canonical Pydantic models shared across all memey modules.

This is the single source of truth for data shapes in the project. The
models fall into three groups:

**Catalog models** -- loaded from the bundled data files and the Imgflip
API: :class:`Template`, :class:`ExpressionRule`, :class:`CompiledExpression`.

**Request/response models** -- exchanged with the captioning endpoint:
:class:`Credentials`, :class:`CaptionBox`, :class:`CaptionRequest`,
:class:`CaptionResult`.

**Configuration models** -- serialised as JSON in the user's config
directory: :class:`Settings`.

All models use Pydantic v2. :class:`Template` uses ``extra="allow"`` so that
fields the Imgflip API adds (``width``, ``captions``, ...) survive a
catalog update round trip.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Catalog ---


class Template(BaseModel):
    """A captionable meme image known to the Imgflip API.

    Example::

        Template(id=61527, name="Y U No", url="https://i.imgflip.com/1bh3.jpg")
    """

    model_config = ConfigDict(extra="allow")

    id: int = Field(description="Stable template id assigned by Imgflip")
    name: str = Field(description="Human-readable template name")
    url: str = Field(default="", description="Reference image URL")
    width: Optional[int] = None
    height: Optional[int] = None
    box_count: Optional[int] = None


class ExpressionRule(BaseModel):
    """A shorthand rule mapping a phrase pattern to a template id.

    ``regex`` is matched case-insensitively and may define up to two
    capture groups (top and bottom text). ``id`` need not exist in the
    local template store.
    """

    id: int
    regex: str


class CompiledExpression:
    """An :class:`ExpressionRule` with its pattern compiled once at load time."""

    __slots__ = ("rule", "pattern")

    def __init__(self, rule: ExpressionRule) -> None:
        self.rule = rule
        self.pattern: re.Pattern[str] = re.compile(rule.regex, re.IGNORECASE)

    @property
    def id(self) -> int:
        return self.rule.id

    def __repr__(self) -> str:
        return f"CompiledExpression(id={self.rule.id}, regex={self.rule.regex!r})"


# --- Captioning ---


class Credentials(BaseModel):
    """Imgflip account credentials, treated as opaque strings."""

    username: Optional[str] = None
    password: Optional[str] = None

    @property
    def is_logged_in(self) -> bool:
        """Whether a username is present."""
        return bool(self.username)


class CaptionBox(BaseModel):
    """One text region of a structured caption request."""

    text: str = ""


class CaptionRequest(BaseModel):
    """Parameters of a ``caption_image`` call.

    Either the simple ``text0``/``text1`` pair is used, or -- when
    ``boxes`` is set -- the structured variant, which preserves the exact
    casing of each box.
    """

    template_id: int
    username: Optional[str] = None
    password: Optional[str] = None
    text0: Optional[str] = None
    text1: Optional[str] = None
    boxes: Optional[list[CaptionBox]] = None

    @property
    def structured(self) -> bool:
        return self.boxes is not None

    def to_form(self) -> dict[str, Any]:
        """Return the form-encoded fields for this request.

        Structured boxes are flattened to ``boxes[i][text]`` keys in order.
        ``None`` values are omitted.
        """
        form: dict[str, Any] = {
            "template_id": str(self.template_id),
            "username": self.username,
            "password": self.password,
        }
        if self.boxes is not None:
            for index, box in enumerate(self.boxes):
                form[f"boxes[{index}][text]"] = box.text
        else:
            form["text0"] = self.text0
            form["text1"] = self.text1
        return {key: value for key, value in form.items() if value is not None}


class CaptionResult(BaseModel):
    """Outcome of a caption request.

    On success ``url`` holds the generated image URL; on failure
    ``error_message`` carries the server's message verbatim.
    """

    success: bool
    url: Optional[str] = None
    page_url: Optional[str] = None
    error_message: Optional[str] = None


# --- Settings ---


class Settings(BaseModel):
    """User-level settings stored in ``<config_dir>/config.json``."""

    api_url: str = Field(
        default="https://api.imgflip.com", description="Imgflip API base URL"
    )
    timeout: float = Field(
        default=10.0, gt=0, description="Request timeout in seconds"
    )
