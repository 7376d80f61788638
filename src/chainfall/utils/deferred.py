from __future__ import annotations

from typing import Iterable, List, Tuple

from esper import World

from chainfall.components.pending_step import PendingStep
from chainfall.systems.state_utils import get_game_state


def schedule_step(world: World, kind: str, delay: float) -> int:
    """Enqueue a continuation tagged with the current game generation."""
    generation = get_game_state(world).generation
    return world.create_entity(PendingStep(kind=kind, remaining=max(0.0, float(delay)), generation=generation))


def pending_steps(world: World) -> List[Tuple[int, PendingStep]]:
    # Entity ids grow monotonically, so this is scheduling order.
    return sorted(world.get_component(PendingStep), key=lambda entry: entry[0])


def cancel_pending_steps(world: World, kinds: Iterable[str] | None = None) -> int:
    """Delete queued continuations (all of them, or only ``kinds``)."""
    wanted = set(kinds) if kinds is not None else None
    doomed = [
        entity
        for entity, step in world.get_component(PendingStep)
        if wanted is None or step.kind in wanted
    ]
    for entity in doomed:
        world.delete_entity(entity, immediate=True)
    return len(doomed)


def pop_due_steps(world: World, dt: float) -> List[PendingStep]:
    """Advance every pending step by ``dt`` and remove those that are due.

    Steps from an older generation are dropped without being returned.
    """
    generation = get_game_state(world).generation
    due: List[PendingStep] = []
    for entity, step in pending_steps(world):
        if step.generation != generation:
            world.delete_entity(entity, immediate=True)
            continue
        step.remaining -= dt
        if step.remaining <= 0.0:
            world.delete_entity(entity, immediate=True)
            due.append(step)
    return due
