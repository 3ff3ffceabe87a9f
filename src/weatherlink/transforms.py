# weatherlink: client for the Davis WeatherLink v2 API
# Copyright (C) 2025 Ruaraidh Dobson, South London Scientific

# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.

# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Composable DataFrame transformation functions.

Small, pure functions used to flatten WeatherLink readings into tables.
Each factory takes its configuration and returns a function from DataFrame
to DataFrame, so steps can be chained with ``pipe()`` or ``compose()``.

Example:
    >>> normalise = compose(
    ...     convert_timestamps("ts", unit="s", utc=True),
    ...     rename_columns({"ts": "date_time"}),
    ...     sort_values(["lsid", "date_time"]),
    ... )
    >>> df = normalise(raw_readings)
"""

from functools import reduce
from typing import Callable, TypeAlias

import pandas as pd

Transformer: TypeAlias = Callable[[pd.DataFrame], pd.DataFrame]


def pipe(df: pd.DataFrame, *functions: Transformer) -> pd.DataFrame:
    """
    Apply transformation functions to a DataFrame in sequence.

    Args:
        df: Input DataFrame
        *functions: Transformer functions, applied left to right

    Returns:
        pd.DataFrame: Result of the last function
    """
    return reduce(lambda data, func: func(data), functions, df)


def compose(*functions: Transformer) -> Transformer:
    """Combine transformer functions into one reusable function."""

    def composed(df: pd.DataFrame) -> pd.DataFrame:
        return pipe(df, *functions)

    return composed


def rename_columns(mapping: dict[str, str]) -> Transformer:
    """Return a function that renames columns according to ``mapping``."""

    def transform(df: pd.DataFrame) -> pd.DataFrame:
        return df.rename(columns=mapping)

    return transform


def convert_timestamps(column: str, **kwargs) -> Transformer:
    """
    Return a function that converts a column to datetime type.

    Args:
        column: Name of the column to convert
        **kwargs: Passed to ``pd.to_datetime()``. WeatherLink timestamps
            are Unix seconds, so use ``unit="s", utc=True``.
    """

    def transform(df: pd.DataFrame) -> pd.DataFrame:
        return df.assign(**{column: pd.to_datetime(df[column], **kwargs)})

    return transform


def sort_values(by: str | list[str], ascending: bool = True) -> Transformer:
    """Return a function that sorts rows by the given column(s)."""

    def transform(df: pd.DataFrame) -> pd.DataFrame:
        return df.sort_values(by=by, ascending=ascending)

    return transform


def reset_index(drop: bool = True) -> Transformer:
    """Return a function that resets the index."""

    def transform(df: pd.DataFrame) -> pd.DataFrame:
        return df.reset_index(drop=drop)

    return transform
