from __future__ import annotations

from resume_match.schemas.analysis import PILLAR_CAPS, PILLAR_ORDER, Pillars


def clamp_pillar(name: str, value: int) -> int:
    return max(0, min(PILLAR_CAPS[name], int(value)))


def distribute(scores: dict[str, int], target: int) -> dict[str, int]:
    """Move pillar scores so they sum to ``target``.

    The difference is spread over the pillars in proportion to their caps, then
    any remainder goes one point at a time (in pillar order when raising, in
    reverse order when lowering). Caps are never exceeded and scores never go
    below zero; since the caps sum to 100, every target in [0, 100] is reachable.
    """
    adjusted = {name: clamp_pillar(name, scores.get(name, 0)) for name in PILLAR_ORDER}
    target = max(0, min(sum(PILLAR_CAPS.values()), int(target)))
    delta = target - sum(adjusted.values())
    if delta == 0:
        return adjusted

    step = 1 if delta > 0 else -1

    def room(name: str) -> int:
        return PILLAR_CAPS[name] - adjusted[name] if step > 0 else adjusted[name]

    remaining = abs(delta)
    for name in PILLAR_ORDER:
        share = abs(delta) * PILLAR_CAPS[name] // 100
        moved = min(share, room(name), remaining)
        adjusted[name] += step * moved
        remaining -= moved

    order = PILLAR_ORDER if step > 0 else tuple(reversed(PILLAR_ORDER))
    while remaining > 0:
        progressed = False
        for name in order:
            if remaining > 0 and room(name) > 0:
                adjusted[name] += step
                remaining -= 1
                progressed = True
        if not progressed:
            break
    return adjusted


def reconcile(pillars: Pillars, *, floor: int, ceiling: int) -> Pillars:
    """Return a copy of ``pillars`` whose total lies in [floor, ceiling]."""
    reconciled = pillars.model_copy(deep=True)
    scores = {name: clamp_pillar(name, score) for name, score in reconciled.scores().items()}
    total = sum(scores.values())
    target = max(floor, min(ceiling, total))
    if target != total:
        scores = distribute(scores, target)
    for name, score in scores.items():
        getattr(reconciled, name).score = score
    return reconciled
