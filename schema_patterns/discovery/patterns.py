import re
from typing import Pattern, Union

from ..exceptions import SettingsError

PatternLike = Union[str, Pattern[str]]


def compile_pattern(pattern: PatternLike, setting: str = "pattern") -> Pattern[str]:
    """Compile a name pattern given either as a string or an already compiled regex."""
    if isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise SettingsError(f"Invalid regular expression for {setting} '{pattern}': {exc}")
