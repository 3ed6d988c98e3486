from __future__ import annotations

from collections.abc import Iterable


def parse_course(group_name: str, marker: str) -> str | None:
    """Course number of a group: the character right after ``marker``.

    ``"CS-К1"`` with marker ``"-К"`` gives ``"1"``. Returns None when the name
    carries no marker or nothing follows it.
    """
    if marker not in group_name:
        return None
    suffix = group_name.split(marker, 1)[1]
    return suffix[:1] or None


def invalid_group_names(names: Iterable[str], marker: str) -> list[str]:
    return [name for name in names if parse_course(name, marker) is None]
