"""
floor/transitions.py
=====================================================================================
Table lifecycle rules.

A table moves between three states. Every change is requested through a named
action; the action's precondition is checked against the current status before
anything is written.

    walk_in   available            -> occupied
    book      available            -> reserved   (+ reservation row)
    free_up   occupied | reserved  -> available  (reservations are kept)
=====================================================================================
"""

from dataclasses import dataclass

from django.db import models

from .exceptions import InvalidTransition, ValidationError
from .models import Table


class Action(models.TextChoices):
    WALK_IN = "walk_in", "Seat walk-in"
    BOOK = "book", "Create booking"
    FREE_UP = "free_up", "Free up"


@dataclass(frozen=True)
class Transition:
    action: str
    sources: frozenset
    target: str
    creates_reservation: bool = False

    def allows(self, status) -> bool:
        return status in self.sources


TRANSITIONS = {
    Action.WALK_IN: Transition(
        action=Action.WALK_IN,
        sources=frozenset({Table.Status.AVAILABLE}),
        target=Table.Status.OCCUPIED,
    ),
    Action.BOOK: Transition(
        action=Action.BOOK,
        sources=frozenset({Table.Status.AVAILABLE}),
        target=Table.Status.RESERVED,
        creates_reservation=True,
    ),
    Action.FREE_UP: Transition(
        action=Action.FREE_UP,
        sources=frozenset({Table.Status.OCCUPIED, Table.Status.RESERVED}),
        target=Table.Status.AVAILABLE,
    ),
}


def get_transition(action) -> Transition:
    try:
        return TRANSITIONS[Action(action)]
    except ValueError:
        raise ValidationError(f"Unknown action: {action!r}.")


def resolve(action, current_status) -> Transition:
    """Return the rule for ``action`` or raise if ``current_status`` forbids it."""
    transition = get_transition(action)
    if not transition.allows(current_status):
        raise InvalidTransition(transition.action, current_status)
    return transition


def next_status(action, current_status):
    return resolve(action, current_status).target


def allowed_actions(status):
    """Actions the board offers for a table in ``status``, in display order."""
    return [t.action for t in TRANSITIONS.values() if t.allows(status)]
