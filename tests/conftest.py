from collections import deque

import pytest


class ScriptedRng:
    """Stands in for random.Random and hands out fixed priorities in order."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = []

    def randrange(self, stop):
        self.calls.append(stop)
        return self.values.pop(0)


def reachable(neighbors_of, start, forbidden_edge=None):
    blocked = tuple(sorted(forbidden_edge)) if forbidden_edge else None
    seen = {start}
    q = deque([start])
    while q:
        cur = q.popleft()
        for nxt in neighbors_of(cur):
            if blocked and tuple(sorted((cur, nxt))) == blocked:
                continue
            if nxt not in seen:
                seen.add(nxt)
                q.append(nxt)
    return seen


@pytest.fixture
def scripted_rng():
    return ScriptedRng


@pytest.fixture
def reach():
    return reachable
