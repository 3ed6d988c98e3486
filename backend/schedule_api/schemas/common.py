from pydantic import BaseModel


def strip_required(value: str) -> str:
    trimmed = value.strip()
    if not trimmed:
        raise ValueError("Значение не может быть пустым")
    return trimmed


def strip_optional(value: str | None) -> str | None:
    if value is None:
        return None
    trimmed = value.strip()
    return trimmed or None


def normalize_names(values: list[str]) -> list[str]:
    """Trim, drop blanks and repeats, keep first-seen order."""
    seen: set[str] = set()
    normalized: list[str] = []
    for item in values:
        name = item.strip()
        if not name or name in seen:
            continue
        seen.add(name)
        normalized.append(name)
    return normalized


class MessageOut(BaseModel):
    message: str
