from __future__ import annotations

import re
from dataclasses import dataclass

"""AppearanceOptions value object.

Options are supplied by the caller (CLI flags or the ``appearance`` section of
the YAML config) and passed by value into the markup generator.
"""

__all__ = [
    "AppearanceOptions",
    "COLUMN_CHOICES",
    "CORNER_CHOICES",
    "THEME_CHOICES",
]

COLUMN_CHOICES = ("auto", "2", "3", "4")
THEME_CHOICES = ("light", "dark")
CORNER_CHOICES = ("rounded", "sharp")

# hex, functional notation or a bare colour keyword; nothing that can close the CSS rule
_COLOR_RE = re.compile(
    r"^(#[0-9a-fA-F]{3,8}|(rgb|rgba|hsl|hsla)\([0-9.,%\s/]+\)|[a-zA-Z]+)$"
)


@dataclass(frozen=True)
class AppearanceOptions:
    """Theming and layout choices for one generation call."""
    accent_color: str = "#007bff"
    columns: str = "auto"
    theme: str = "light"
    corner_radius: str = "rounded"
    show_item_number: bool = True

    def __post_init__(self) -> None:
        # YAML may hand us an int for columns
        object.__setattr__(self, "columns", str(self.columns))
        if not _COLOR_RE.match(str(self.accent_color).strip()):
            raise ValueError(f"invalid accent color: {self.accent_color!r}")
        object.__setattr__(self, "accent_color", str(self.accent_color).strip())
        if self.columns not in COLUMN_CHOICES:
            raise ValueError(f"columns must be one of {COLUMN_CHOICES}, got {self.columns!r}")
        if self.theme not in THEME_CHOICES:
            raise ValueError(f"theme must be one of {THEME_CHOICES}, got {self.theme!r}")
        if self.corner_radius not in CORNER_CHOICES:
            raise ValueError(
                f"corner_radius must be one of {CORNER_CHOICES}, got {self.corner_radius!r}"
            )
