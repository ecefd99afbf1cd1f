"""Colors of the trash command line.

Each style used by the commands has a default color that can be
overridden in ``~/.config/ironbin/theme.toml``::

    [colors]
    path = "#ffffff"
    date = "grey62"

Any color Rich understands is accepted. A theme file that cannot be
read or does not validate is ignored with a warning.
"""

import logging
import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.color import Color, ColorParseError
from rich.theme import Theme

from ironbin.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)


class ThemeColors(BaseModel):
    """Colors of the styles used to print trash entries and messages."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    path: str = "#ffffff"
    size: str = "#0ec1c8"
    date: str = "#b2bec3"
    header: str = "#69B9A1"
    info: str = "#0ec1c8"
    error: str = "#f53263"

    @field_validator("*")
    @classmethod
    def check_color(cls, value: str) -> str:
        try:
            Color.parse(value)
        except ColorParseError as e:
            msg = f"invalid color {value!r}"
            raise ValueError(msg) from e
        return value


def load_colors(path: Path | None = None) -> ThemeColors:
    """Load the theme colors.

    Args:
        path: Theme file. Defaults to the user theme path.

    Returns:
        Colors from the file's ``[colors]`` table over the defaults, or
        the defaults alone if the file is missing or invalid.
    """
    if path is None:
        path = get_user_theme_path()

    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return ThemeColors()
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return ThemeColors()

    try:
        return ThemeColors.model_validate(data.get("colors", {}))
    except ValidationError as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return ThemeColors()


def build_theme(colors: ThemeColors) -> Theme:
    """Map theme colors to the Rich styles the commands print with."""
    return Theme(
        {
            "path": colors.path,
            "size": colors.size,
            "date": colors.date,
            "header": f"bold {colors.header}",
            "info": colors.info,
            "error": f"bold {colors.error}",
        }
    )
