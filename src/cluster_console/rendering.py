"""Tabular rendering of cluster data for the console."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

import tabulate


TABLE_FORMAT = "simple"


def _render(rows: list[list[str]], headers: Sequence[str]) -> str:
    return tabulate.tabulate(rows, headers=list(headers), tablefmt=TABLE_FORMAT)


def render_single_map(data: Mapping[str, str], key_header: str, value_header: str) -> str:
    """One row per key."""
    rows = [[key, value] for key, value in data.items()]
    return _render(rows, (key_header, value_header))


def render_multi_value_map(
    data: Mapping[str, Sequence[str]], key_header: str, value_header: str
) -> str:
    """One row per value; keys without values still get a row."""
    rows: list[list[str]] = []
    for key, values in data.items():
        if not values:
            rows.append([key, ""])
        for value in values:
            rows.append([key, value])
    return _render(rows, (key_header, value_header))


def render_map_value_map(
    data: Mapping[str, Mapping[str, str]],
    key_header: str,
    sub_key_header: str,
    value_header: str,
) -> str:
    """One row per nested key/value pair."""
    rows: list[list[str]] = []
    for key, nested in data.items():
        if not nested:
            rows.append([key, "", ""])
        for sub_key, value in nested.items():
            rows.append([key, sub_key, value])
    return _render(rows, (key_header, sub_key_header, value_header))
