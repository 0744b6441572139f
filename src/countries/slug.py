import re
from typing import Dict, Set

from unidecode import unidecode

_SEPARATORS = re.compile(r"[\s/]+")
_DISALLOWED = re.compile(r"[^a-z0-9-]")
_HYPHEN_RUNS = re.compile(r"-+")


def _fold(value: str) -> str:
    # unidecode also covers characters NFD cannot decompose (ø, ß, ł).
    return unidecode(value or "").lower()


def _finish(value: str) -> str:
    value = _SEPARATORS.sub("-", value)
    value = _DISALLOWED.sub("", value)
    value = _HYPHEN_RUNS.sub("-", value)
    return value.strip("-")


def slugify_es(value: str) -> str:
    """
    Spanish routing slug: "Côte d'Ivoire & Co" -> "cote-divoire-y-co".
    """
    return _finish(_fold(value).replace("&", "y"))


def slugify_en(value: str) -> str:
    return _finish(_fold(value))


class SlugAllocator:
    """
    Hands out unique slugs in call order.

    The first caller keeps the bare slug; later collisions get "-2", "-3", ...
    A suffix that is already taken by another country is skipped.
    """

    def __init__(self) -> None:
        self._counts: Dict[str, int] = {}
        self._taken: Set[str] = set()

    def allocate(self, base: str) -> str:
        if base not in self._taken:
            self._counts.setdefault(base, 1)
            self._taken.add(base)
            return base
        count = self._counts.get(base, 1)
        while True:
            count += 1
            candidate = f"{base}-{count}"
            if candidate not in self._taken:
                break
        self._counts[base] = count
        self._taken.add(candidate)
        return candidate

    def __contains__(self, slug: str) -> bool:
        return slug in self._taken
