# gamecatalog/core/game.py

"""Game dataclass and input validation for the game catalog.

This module defines the Game record passed into and returned from the
repository, along with the name-list normalization shared by the genre
and platform relations.
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Iterable
from dataclasses import asdict, dataclass, field, replace
from datetime import date, datetime
from typing import Any

from gamecatalog.core.errors import ValidationError
from gamecatalog.utils.date_utils import format_release_date, parse_release_date

__all__ = ["Game", "unique_names"]

_TEXT_FIELDS = ("description", "developer", "publisher")


@dataclass
class Game:
    """Represents a single catalog game with its metadata and relations.

    ``id`` and ``created_at`` are assigned by the database; leave them unset
    when adding a game. ``genres`` and ``platforms`` are filled in when a game
    is read back and are ordered by name.
    """

    title: str
    description: str | None = None
    release_date: date | None = None
    developer: str | None = None
    publisher: str | None = None
    rating: float | None = None

    id: int | None = None
    created_at: datetime | None = None

    genres: list[str] = field(default_factory=list)
    platforms: list[str] = field(default_factory=list)

    def validated(self) -> Game:
        """Check the record before it is written and return a normalized copy.

        Release dates given as strings are parsed to ``date`` and integral
        ratings are widened to ``float`` on the copy; this instance is left
        unchanged.

        Raises:
            ValidationError: If the title is empty or a field has the wrong type.
        """
        if not isinstance(self.title, str) or not self.title.strip():
            raise ValidationError("Game title must be a non-empty string", field="title")

        for name in _TEXT_FIELDS:
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise ValidationError(f"Game {name} must be text or None", field=name)

        try:
            release_date = parse_release_date(self.release_date)
        except ValueError as exc:
            raise ValidationError(str(exc), field="release_date") from exc

        rating = self.rating
        if rating is not None:
            if isinstance(rating, bool) or not isinstance(rating, numbers.Real):
                raise ValidationError("Game rating must be a number or None", field="rating")
            if not math.isfinite(rating):
                raise ValidationError("Game rating must be finite", field="rating")
            rating = float(rating)

        return replace(self, release_date=release_date, rating=rating)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly dict (dates as ISO strings)."""
        data = asdict(self)
        data["release_date"] = format_release_date(self.release_date)
        data["created_at"] = self.created_at.isoformat() if self.created_at else None
        return data


def unique_names(names: Iterable[str] | None, field_name: str) -> list[str]:
    """Validate a genre/platform name list and collapse duplicates.

    Matching is exact and case-sensitive, so "RPG" and "rpg" are distinct.
    First-occurrence order is kept.

    Args:
        names: Names supplied by the caller. None means no names.
        field_name: Used in the error, e.g. "genres".

    Returns:
        De-duplicated list of names.

    Raises:
        ValidationError: If the argument is a bare string or any name is empty.
    """
    if names is None:
        return []
    if isinstance(names, str):
        raise ValidationError(f"{field_name} must be a list of names, not a single string", field=field_name)

    result: dict[str, None] = {}
    for name in names:
        if not isinstance(name, str) or not name.strip():
            raise ValidationError(f"{field_name} entries must be non-empty strings", field=field_name)
        result.setdefault(name, None)
    return list(result)
