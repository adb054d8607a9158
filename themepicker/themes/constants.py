"""Custom theme framework constants."""

from __future__ import annotations

DEFAULT_THEME_ID = "default"
DEFAULT_CUSTOM_TITLE = "Custom"
CUSTOM_THEME_ID_PREFIX = "custom-"

# Step order is fixed: font, icon, color, shape.
COMPONENT_ORDER: tuple[str, ...] = (
    "font",
    "icon",
    "color",
    "shape",
)

OVERLAY_CATEGORIES: dict[str, str] = {
    "font": "android.theme.customization.font",
    "icon": "android.theme.customization.icon_pack.android",
    "color": "android.theme.customization.accent_color",
    "shape": "android.theme.customization.adaptive_icon_shape",
}

STEP_TITLES: dict[str, str] = {
    "font": "Font",
    "icon": "Icon",
    "color": "Color",
    "shape": "Shape",
}

NEXT_LABEL = "Next"
APPLY_LABEL = "Apply"
