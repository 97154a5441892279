"""Example: build a program without markers and print its interchange JSON."""

from tangibl import (
    BooleanLoopKind,
    CommandKind,
    Condition,
    ConditionalKind,
    CountedLoopKind,
    Value,
    flow,
    print_program,
    start,
)


def main() -> None:
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
    print(print_program(program, indent=2))


if __name__ == "__main__":
    main()
