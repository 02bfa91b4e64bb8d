# Copyright (C) 2023 Oliver Michael Kamperis
# Email: o.m.kamperis@gmail.com
#
# This program is free software: you can redistribute it and/or modify it under
# the terms of the GNU General Public License as published by the Free Software
# Foundation, either version 3 of the License, or any later version.
#
# This program is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS
# FOR A PARTICULAR PURPOSE. See the GNU General Public License for details.
#
# You should have received a copy of the GNU General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.

"""Module defining argument parsing utilities."""

import argparse
import logging
from typing import Any

__all__ = (
    "bool_options",
    "optional_bool",
    "optional_int",
    "positive_int",
    "log_level"
)


def bool_options(default: bool = False) -> dict[str, Any]:
    """
    Create the options of a Boolean flag, which may be given without a value
    to mean `True`, or with an explicit value such as `yes` or `off`.

    Returns
    -------
    `dict[str, Any]` - A dictionary of options for `add_argument`.
    """
    return {
        "nargs": "?",
        "default": default,
        "const": True,
        "type": optional_bool
    }


def optional_int(value: str) -> int | None:
    """
    Optional integer argument type.

    Return None if the value is an empty string or the string "None", otherwise
    return the input string parsed as an integer.
    """
    if not value or value == "None":
        return None
    try:
        return int(value)
    except ValueError as error:
        raise argparse.ArgumentTypeError(
            f"Cannot parse {value!r} as int.") from error


def positive_int(value: str) -> int:
    """Positive integer argument type."""
    try:
        parsed = int(value)
    except ValueError as error:
        raise argparse.ArgumentTypeError(
            f"Cannot parse {value!r} as int.") from error
    if parsed < 1:
        raise argparse.ArgumentTypeError(
            f"Expected a positive integer, got {parsed}.")
    return parsed


def optional_bool(value: str) -> bool | None:
    """
    Optional boolean argument type.

    Return None if the value is an empty string or the string "None",
    otherwise return the input string parsed as a boolean.
    """
    if not value or value == "None":
        return None
    if value.lower() in ["true", "yes", "on"]:
        return True
    if value.lower() in ["false", "no", "off"]:
        return False
    raise argparse.ArgumentTypeError(f"Cannot parse {value!r} as a boolean.")


def log_level(value: str) -> int:
    """Logging level argument type, accepts names such as `info`."""
    level = logging.getLevelName(value.upper())
    if not isinstance(level, int):
        raise argparse.ArgumentTypeError(f"Unknown logging level {value!r}.")
    return level
