"""A small in-process message-passing runtime with ranked communicators.

Each rank runs in its own thread. Ranks exchange copies of Python objects
through point-to-point messages (``send``/``recv``) and collective
operations (``bcast``/``reduce``).
"""

from __future__ import annotations

import copy
import functools
import operator
import threading
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable

ANY_SOURCE = -1
ANY_TAG = -1

SUM: Callable[[Any, Any], Any] = operator.add
PROD: Callable[[Any, Any], Any] = operator.mul
MAX: Callable[[Any, Any], Any] = max
MIN: Callable[[Any, Any], Any] = min

_BCAST = "bcast"
_REDUCE = "reduce"


class CommAborted(RuntimeError):
    """Raised in a rank that is blocked while another rank has failed."""


@dataclass(frozen=True)
class Status:
    """Where a received message came from and the tag it carried."""

    source: int
    tag: int


@dataclass(eq=False)
class _Envelope:
    source: int
    tag: Any
    collective: bool
    payload: Any


class _World:
    """Mailboxes shared by all ranks of one run."""

    def __init__(self, size: int) -> None:
        self.size = size
        self._cond = threading.Condition()
        self._queues: list[deque[_Envelope]] = [deque() for _ in range(size)]
        self._aborted = False

    def post(self, dest: int, envelope: _Envelope) -> None:
        with self._cond:
            if self._aborted:
                raise CommAborted("communication aborted by a failing rank")
            self._queues[dest].append(envelope)
            self._cond.notify_all()

    def take(self, dest: int, match: Callable[[_Envelope], bool]) -> _Envelope:
        with self._cond:
            queue = self._queues[dest]
            while True:
                if self._aborted:
                    raise CommAborted("communication aborted by a failing rank")
                found = next((env for env in queue if match(env)), None)
                if found is not None:
                    queue.remove(found)
                    return found
                self._cond.wait()

    def abort(self) -> None:
        with self._cond:
            self._aborted = True
            self._cond.notify_all()


class Communicator:
    """One rank's view of a group of ``size`` communicating ranks."""

    def __init__(self, world: _World, rank: int) -> None:
        self._world = world
        self.rank = rank
        self.size = world.size

    def __repr__(self) -> str:
        return f"Communicator(rank={self.rank}, size={self.size})"

    def _check_rank(self, rank: int, what: str) -> None:
        if not 0 <= rank < self.size:
            raise ValueError(f"{what} {rank} is out of range for size {self.size}")

    def send(self, obj: Any, dest: int, tag: int = 0) -> None:
        """Send a copy of ``obj`` to rank ``dest`` with the given tag."""
        self._check_rank(dest, "destination")
        if tag < 0:
            raise ValueError(f"tag must be non-negative, got {tag}")
        self._world.post(
            dest, _Envelope(self.rank, tag, False, copy.deepcopy(obj))
        )

    def recv(self, source: int = ANY_SOURCE, tag: int = ANY_TAG) -> tuple[Any, Status]:
        """Wait for a matching message and return it with its status."""
        if source != ANY_SOURCE:
            self._check_rank(source, "source")

        def match(env: _Envelope) -> bool:
            return (
                not env.collective
                and (source == ANY_SOURCE or env.source == source)
                and (tag == ANY_TAG or env.tag == tag)
            )

        env = self._world.take(self.rank, match)
        return env.payload, Status(env.source, env.tag)

    def _collective_take(self, source: int, kind: str) -> Any:
        env = self._world.take(
            self.rank,
            lambda e: e.collective and e.source == source and e.tag == kind,
        )
        return env.payload

    def bcast(self, obj: Any = None, root: int = 0) -> Any:
        """Return the root's ``obj`` on every rank."""
        self._check_rank(root, "root")
        if self.rank == root:
            for dest in range(self.size):
                if dest != root:
                    self._world.post(
                        dest, _Envelope(root, _BCAST, True, copy.deepcopy(obj))
                    )
            return obj
        return self._collective_take(root, _BCAST)

    def reduce(
        self,
        value: Any,
        op: Callable[[Any, Any], Any] = SUM,
        root: int = 0,
    ) -> Any:
        """Combine every rank's value with ``op`` in rank order; result on root only."""
        self._check_rank(root, "root")
        if self.rank != root:
            self._world.post(
                root, _Envelope(self.rank, _REDUCE, True, copy.deepcopy(value))
            )
            return None
        values = [
            value if source == root else self._collective_take(source, _REDUCE)
            for source in range(self.size)
        ]
        return functools.reduce(op, values)


def run(size: int, target: Callable[..., Any], *args: Any) -> list[Any]:
    """Run ``target(comm, *args)`` on ``size`` ranks and return results by rank.

    If any rank raises, the others are released and the first original
    error is raised again here.
    """
    if size < 1:
        raise ValueError(f"size must be at least 1, got {size}")
    world = _World(size)
    results: list[Any] = [None] * size
    errors: dict[int, BaseException] = {}

    def body(rank: int) -> None:
        try:
            results[rank] = target(Communicator(world, rank), *args)
        except BaseException as exc:  # noqa: BLE001 - reported to the caller
            errors[rank] = exc
            world.abort()

    threads = [
        threading.Thread(target=body, args=(rank,), name=f"rank-{rank}", daemon=True)
        for rank in range(size)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    if errors:
        ordered = [errors[rank] for rank in sorted(errors)]
        primary = next(
            (exc for exc in ordered if not isinstance(exc, CommAborted)), ordered[0]
        )
        raise primary
    return results