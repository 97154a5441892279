"""Program tree produced by reconstruction or by the builder."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class CommandKind(Enum):
    MOVE_BACKWARDS = "moveBackwards"
    MOVE_FORWARDS = "moveForwards"
    SHOOT = "shoot"
    TURN_LEFT = "turnLeft"
    TURN_RIGHT = "turnRight"


class ConditionalKind(Enum):
    BLOCKED = "blocked"


class BooleanLoopKind(Enum):
    WHILE = "while"


class CountedLoopKind(Enum):
    REPEAT = "repeat"


class Condition(Enum):
    IS_BLOCKED = "isBlocked"
    IS_PATH_CLEAR = "isPathClear"


class Value(Enum):
    ONE = "1"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    INFINITY = "Infinity"

    @property
    def count(self) -> float:
        if self is Value.INFINITY:
            return math.inf
        return int(self.value)


@dataclass(frozen=True)
class Command:
    kind: CommandKind
    next: Optional["Flow"] = None

    @property
    def name(self) -> str:
        return self.kind.value


@dataclass(frozen=True)
class Conditional:
    """Branch on a condition; ``next`` is the true path, ``alternate`` the false path."""

    kind: ConditionalKind
    next: Optional["Flow"] = None
    alternate: Optional["Flow"] = None

    @property
    def name(self) -> str:
        return self.kind.value


@dataclass(frozen=True)
class BooleanLoop:
    kind: BooleanLoopKind
    condition: Optional[Condition] = None
    body: Optional["Flow"] = None
    next: Optional["Flow"] = None

    @property
    def name(self) -> str:
        return self.kind.value


@dataclass(frozen=True)
class CountedLoop:
    kind: CountedLoopKind
    value: Optional[Value] = None
    body: Optional["Flow"] = None
    next: Optional["Flow"] = None

    @property
    def name(self) -> str:
        return self.kind.value


Flow = Union[Command, Conditional, BooleanLoop, CountedLoop]


@dataclass(frozen=True)
class Start:
    """Root of a program: the main flow, as the 'main' function of common languages."""

    next: Optional[Flow] = None

    @property
    def name(self) -> str:
        return "start"
