"""
models/callbacks.py
-------------------
Typed payloads carried by inline buttons.

Every variant is a frozen dataclass with a `type` tag. Instances are built
by handlers when rendering keyboards, encoded by `dispatch.callback_codec`
and decoded again when the button is pressed. They are never persisted.
"""

from dataclasses import dataclass
from typing import ClassVar, Literal, Optional, Union

ReminderAction = Literal["set", "cancel"]
ConfigAction = Literal["distances", "notifications", "reminder"]
NavigationAction = Literal["back", "next", "close"]
PaginationAction = Literal["prev", "next", "goto"]


# ── Races ─────────────────────────────────────────────────

@dataclass(frozen=True)
class RaceDetailsCallback:
    race_id: str
    type: ClassVar[str] = "race_details"


@dataclass(frozen=True)
class RaceReminderCallback:
    race_id: str
    action: ReminderAction
    type: ClassVar[str] = "race_reminder"


@dataclass(frozen=True)
class RaceLocationCallback:
    race_id: str
    type: ClassVar[str] = "race_location"


@dataclass(frozen=True)
class RacesListCallback:
    distance: Optional[int] = None
    type: ClassVar[str] = "races_list"


@dataclass(frozen=True)
class RacesFilterCallback:
    distance: int
    type: ClassVar[str] = "races_filter"


@dataclass(frozen=True)
class RacesSearchCallback:
    start_distance: int
    end_distance: int
    type: ClassVar[str] = "races_search"


@dataclass(frozen=True)
class RaceFavoriteCallback:
    race_id: str
    type: ClassVar[str] = "race_favorite"


@dataclass(frozen=True)
class RaceUnfavoriteCallback:
    race_id: str
    type: ClassVar[str] = "race_unfavorite"


@dataclass(frozen=True)
class RacesListFavoriteCallback:
    type: ClassVar[str] = "races_list_favorite"


# ── User ──────────────────────────────────────────────────

@dataclass(frozen=True)
class UserConfigCallback:
    action: ConfigAction
    value: Optional[str] = None
    type: ClassVar[str] = "user_config"


# ── Shared ────────────────────────────────────────────────

@dataclass(frozen=True)
class NavigationCallback:
    action: NavigationAction
    target: str
    type: ClassVar[str] = "navigation"


@dataclass(frozen=True)
class PaginationCallback:
    action: PaginationAction
    page: int
    target: str
    type: ClassVar[str] = "pagination"


CallbackData = Union[
    RaceDetailsCallback,
    RaceReminderCallback,
    RaceLocationCallback,
    RacesListCallback,
    RacesFilterCallback,
    RacesSearchCallback,
    RaceFavoriteCallback,
    RaceUnfavoriteCallback,
    RacesListFavoriteCallback,
    UserConfigCallback,
    NavigationCallback,
    PaginationCallback,
]
