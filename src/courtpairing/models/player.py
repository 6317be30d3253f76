"""A player taking part in a tournament."""

# Court Pairing
# Copyright (C) 2025  Court Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict

from courtpairing.models.enums import Gender
from courtpairing.utils import format_datetime, parse_datetime


def generate_id() -> str:
    """Return a fresh random identifier."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Player:
    """
    Immutable player identity used by the scheduling engine.

    The engine never embeds players by value inside matches, byes or
    standings. Everything else refers to a player through ``id``.

    Attributes
    ----------
    name : str
        Display name, also the last tie-break of the leaderboard.
    gender : Gender
        Required to be male or female for the mixed format only.
    id : str
        Unique identifier, generated when not supplied.
    skill_rating : int
        Optional 0-5 rating kept for the caller; unused by the engine.
    is_active : bool
        Inactive players are ignored by the scheduler.
    created_at : datetime
        Creation timestamp.

    Examples
    --------
    Creating a player::

        player = Player(name="Ana", gender=Gender.FEMALE)

    Deactivating a player::

        player = player.copy_with(is_active=False)
    """

    name: str
    gender: Gender = Gender.UNSPECIFIED
    id: str = field(default_factory=generate_id)
    skill_rating: int = 0
    is_active: bool = True
    created_at: datetime = field(default_factory=datetime.now, compare=False)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Player):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return f"Player(id: {self.id}, name: {self.name}, gender: {self.gender.short_name})"

    def copy_with(self, **changes: Any) -> "Player":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "gender": self.gender.value,
            "skill_rating": self.skill_rating,
            "is_active": self.is_active,
            "created_at": format_datetime(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Deserialize player from dictionary."""
        try:
            gender = Gender(data.get("gender", Gender.UNSPECIFIED.value))
        except ValueError:
            gender = Gender.UNSPECIFIED
        return cls(
            id=data["id"],
            name=data["name"],
            gender=gender,
            skill_rating=data.get("skill_rating", 0),
            is_active=data.get("is_active", True),
            created_at=parse_datetime(data.get("created_at")) or datetime.now(),
        )
