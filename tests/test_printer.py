import json

import pytest

from tangibl import flow, start
from tangibl.ast import (
    BooleanLoop,
    BooleanLoopKind,
    Command,
    CommandKind,
    Condition,
    Conditional,
    ConditionalKind,
    CountedLoopKind,
    Start,
    Value,
)
from tangibl.printer import print_program, program_to_dict


def test_prints_a_complex_tree():
    program = (
        start()
        .with_command(CommandKind.SHOOT)
        .with_conditional(
            ConditionalKind.BLOCKED,
            flow().with_command(CommandKind.TURN_LEFT).build(),
        )
        .with_command(CommandKind.MOVE_BACKWARDS)
        .with_boolean_loop(
            BooleanLoopKind.WHILE,
            Condition.IS_BLOCKED,
            flow().with_command(CommandKind.TURN_RIGHT).build(),
        )
        .with_command(CommandKind.MOVE_FORWARDS)
        .with_counted_loop(
            CountedLoopKind.REPEAT,
            Value.THREE,
            flow().with_command(CommandKind.TURN_LEFT).build(),
        )
        .with_command(CommandKind.MOVE_FORWARDS)
        .build()
    )

    expected = (
        '{"name":"start","next":{"name":"shoot","next":{"alternate":{"name":"turnLeft"},'
        '"name":"blocked","next":{"name":"moveBackwards","next":{"body":{"name":"turnRight"},'
        '"condition":"isBlocked","name":"while","next":{"name":"moveForwards","next":'
        '{"body":{"name":"turnLeft"},"name":"repeat","next":{"name":"moveForwards"},'
        '"value":"3"}}}}}}}'
    )
    assert print_program(program) == expected


def test_empty_program():
    assert print_program(start().build()) == '{"name":"start"}'
    assert program_to_dict(Start()) == {'name': 'start'}


def test_absent_slots_are_omitted():
    program = Start(next=BooleanLoop(BooleanLoopKind.WHILE))

    assert program_to_dict(program) == {'name': 'start', 'next': {'name': 'while'}}


def test_conditional_without_alternate_keeps_true_path():
    program = Start(
        next=Conditional(ConditionalKind.BLOCKED, next=Command(CommandKind.SHOOT))
    )

    assert program_to_dict(program) == {
        'name': 'start',
        'next': {'name': 'blocked', 'next': {'name': 'shoot'}},
    }


def test_indent_produces_equivalent_json():
    program = start().with_command(CommandKind.TURN_RIGHT).build()

    pretty = print_program(program, indent=2)

    assert '\n' in pretty
    assert json.loads(pretty) == json.loads(print_program(program))


def test_unknown_node_raises_value_error():
    with pytest.raises(ValueError):
        program_to_dict(Start(next='mystery'))


def test_builder_produces_nested_chains():
    program = (
        start()
        .with_counted_loop(
            CountedLoopKind.REPEAT,
            Value.INFINITY,
            flow().with_command(CommandKind.SHOOT).with_command(CommandKind.TURN_LEFT).build(),
        )
        .build()
    )

    loop = program.next
    assert loop.value is Value.INFINITY
    assert loop.body == Command(CommandKind.SHOOT, next=Command(CommandKind.TURN_LEFT))
    assert loop.next is None


def test_empty_flow_builder_builds_nothing():
    assert flow().build() is None
