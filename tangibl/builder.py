"""Fluent construction of program trees without going through geometry.

    program = (
        start()
        .with_command(CommandKind.SHOOT)
        .with_conditional(ConditionalKind.BLOCKED, flow().with_command(CommandKind.TURN_LEFT).build())
        .with_command(CommandKind.MOVE_FORWARDS)
        .build()
    )

Nodes are immutable, so the chain is recorded first and assembled from the
tail when ``build`` is called. A conditional's true path is whatever is
chained after it.
"""

from __future__ import annotations

from typing import Callable, List, Optional, TypeVar

from .ast import (
    BooleanLoop,
    BooleanLoopKind,
    Command,
    CommandKind,
    Condition,
    Conditional,
    ConditionalKind,
    CountedLoop,
    CountedLoopKind,
    Flow,
    Start,
    Value,
)

_Step = Callable[[Optional[Flow]], Flow]
_B = TypeVar("_B", bound="_ChainBuilder")


class _ChainBuilder:
    def __init__(self) -> None:
        self._steps: List[_Step] = []

    def with_command(self: _B, kind: CommandKind) -> _B:
        self._steps.append(lambda rest: Command(kind, next=rest))
        return self

    def with_conditional(self: _B, kind: ConditionalKind, alternate: Optional[Flow]) -> _B:
        self._steps.append(lambda rest: Conditional(kind, next=rest, alternate=alternate))
        return self

    def with_boolean_loop(
        self: _B, kind: BooleanLoopKind, condition: Optional[Condition], body: Optional[Flow]
    ) -> _B:
        self._steps.append(
            lambda rest: BooleanLoop(kind, condition=condition, body=body, next=rest)
        )
        return self

    def with_counted_loop(
        self: _B, kind: CountedLoopKind, value: Optional[Value], body: Optional[Flow]
    ) -> _B:
        self._steps.append(lambda rest: CountedLoop(kind, value=value, body=body, next=rest))
        return self

    def _build_chain(self) -> Optional[Flow]:
        chain: Optional[Flow] = None
        for step in reversed(self._steps):
            chain = step(chain)
        return chain


class FlowBuilder(_ChainBuilder):
    def build(self) -> Optional[Flow]:
        return self._build_chain()


class StartBuilder(_ChainBuilder):
    def build(self) -> Start:
        return Start(next=self._build_chain())


def start() -> StartBuilder:
    return StartBuilder()


def flow() -> FlowBuilder:
    return FlowBuilder()


__all__ = ["FlowBuilder", "StartBuilder", "flow", "start"]
