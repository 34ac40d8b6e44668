"""
Transition table helpers shared by the trip, driver and truck lifecycles.

Each lifecycle keeps its own table: a mapping from a status to the frozen set
of statuses it may move to. Anything missing from the table is illegal.
"""

from typing import Iterator, Mapping, FrozenSet, Tuple, TypeVar

from waybill.app.core.exceptions import StateTransitionError

S = TypeVar("S")

TransitionTable = Mapping[S, FrozenSet[S]]


def can_transition(table: TransitionTable, current: S, target: S) -> bool:
    return target in table.get(current, frozenset())


def ensure_transition(table: TransitionTable, current: S, target: S, entity: str = "entity") -> None:
    """
    Raise StateTransitionError unless `current -> target` is in `table`.

    Args:
        table: The entity's transition table
        current: Status the entity is in now
        target: Status the caller asked for
        entity: Entity name used in the error message
    """
    if not can_transition(table, current, target):
        raise StateTransitionError(current_state=current, attempted_state=target, entity=entity)


def allowed_pairs(table: TransitionTable) -> Iterator[Tuple[S, S]]:
    """Yield every legal (from, to) pair in the table."""
    for current, targets in table.items():
        for target in targets:
            yield current, target


def is_terminal(table: TransitionTable, status: S) -> bool:
    return not table.get(status)
