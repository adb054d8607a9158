"""Serialized package reference parsing and edit-mode seeding."""

from __future__ import annotations

import json
import logging
import re
import uuid
from typing import TYPE_CHECKING, Iterable

from themepicker.themes.constants import CUSTOM_THEME_ID_PREFIX, DEFAULT_CUSTOM_TITLE
from themepicker.themes.models import (
    ComponentKind,
    ThemeBundle,
    ThemeComponentOption,
    ThemeValidationError,
)

if TYPE_CHECKING:
    from themepicker.themes.providers import OptionProvider

logger = logging.getLogger(__name__)

_PACKAGE_RE = re.compile(r"^[A-Za-z0-9_]+(?:\.[A-Za-z0-9_]+)*$")

_MAX_SERIALIZED_BYTES = 16 * 1024
_MAX_PACKAGE_LEN = 255
_MAX_TITLE_LEN = 120


def new_custom_theme_id() -> str:
    return f"{CUSTOM_THEME_ID_PREFIX}{uuid.uuid4().hex[:12]}"


def decode_packages(serialized: str) -> dict[ComponentKind, str]:
    """Decode a serialized package reference into a package name per kind."""
    if not isinstance(serialized, str):
        raise ThemeValidationError("Package reference must be a string")
    if len(serialized.encode("utf-8")) > _MAX_SERIALIZED_BYTES:
        raise ThemeValidationError(
            f"Package reference exceeds max size ({_MAX_SERIALIZED_BYTES} bytes)"
        )
    try:
        data = json.loads(serialized)
    except json.JSONDecodeError as exc:
        raise ThemeValidationError(f"Invalid JSON in package reference: {exc}") from exc
    if not isinstance(data, dict):
        raise ThemeValidationError("Expected JSON object in package reference")

    packages: dict[ComponentKind, str] = {}
    for category, value in data.items():
        kind = ComponentKind.from_category(category)
        packages[kind] = _parse_package(category, value)
    return packages


def encode_packages(theme: ThemeBundle) -> str:
    """Serialize the packages of a theme into its package reference form."""
    return json.dumps(theme.packages(), sort_keys=True)


def load_seed_theme(
    serialized: str | None,
    title: str | None,
    providers: Iterable[OptionProvider],
    *,
    theme_id: str | None = None,
    default_title: str = DEFAULT_CUSTOM_TITLE,
) -> ThemeBundle | None:
    """Resolve a serialized reference into the custom theme being edited.

    Returns None when the reference is missing, unreadable or does not name an
    option for every kind; callers then start a brand-new theme instead.
    """
    if not serialized:
        return None
    try:
        decode_packages(serialized)
    except ThemeValidationError as exc:
        logger.warning("Ignoring unreadable seed theme %r: %s", title, exc)
        return None

    merged: dict[ComponentKind, ThemeComponentOption] = {}
    for provider in providers:
        partial = provider.parse(serialized)
        if partial is None:
            continue
        merged.update(partial.options)

    seed = ThemeBundle(
        theme_id=theme_id or new_custom_theme_id(),
        title=_clean_title(title, default_title),
        options=merged,
        is_custom=True,
    )
    if not seed.is_complete:
        missing = ", ".join(kind.value for kind in seed.missing_kinds)
        logger.warning("Ignoring seed theme %r; unresolved components: %s", title, missing)
        return None
    return seed


def _parse_package(category: str, value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ThemeValidationError(f"Package for {category!r} must be a non-empty string")
    cleaned = value.strip()
    if len(cleaned) > _MAX_PACKAGE_LEN:
        raise ThemeValidationError(f"Package for {category!r} exceeds max length {_MAX_PACKAGE_LEN}")
    if not _PACKAGE_RE.match(cleaned):
        raise ThemeValidationError(f"Package for {category!r} is not a package name: {cleaned!r}")
    return cleaned


def _clean_title(title: str | None, default_title: str) -> str:
    cleaned = (title or "").strip()
    if not cleaned or any(ch in cleaned for ch in ("\n", "\r", "\t")):
        return default_title
    return cleaned[:_MAX_TITLE_LEN]
