"""Parallel trapezoidal-rule integration over ranked communicators."""

from __future__ import annotations

import argparse
import math
import time
from typing import NamedTuple

from ranklab.comm import SUM, Communicator, run

_ROOT = 0

SEND_RECV_DEFAULTS = (0.0, 10.0, 2_000_000_000)
REDUCE_DEFAULTS = (1.0, 5.0, 1_000_000_000)


class Share(NamedTuple):
    """The part of the interval one rank integrates."""

    local_a: float
    local_b: float
    local_n: int
    h: float


def f(x: float) -> float:
    """The function being integrated."""
    return (
        math.exp(math.sin(x) * math.cos(x))
        * math.log(x + 1)
        * math.sqrt(x * x * x + x * x + 1)
    )


def trap(left_endpt: float, right_endpt: float, trap_count: int, base_len: float) -> float:
    """Trapezoidal estimate from ``left_endpt`` using ``trap_count`` bases."""
    estimate = 0.0
    for i in range(trap_count):
        x = left_endpt + i * base_len
        estimate += (f(x) + f(x + base_len)) / 2.0
    return estimate * base_len


def local_share(a: float, b: float, n: int, rank: int, size: int) -> Share:
    """Split ``n`` trapezoids over ``[a, b]`` evenly and return ``rank``'s part."""
    if n < 1:
        raise ValueError(f"n must be at least 1, got {n}")
    if size < 1:
        raise ValueError(f"size must be at least 1, got {size}")
    if not 0 <= rank < size:
        raise ValueError(f"rank {rank} is out of range for size {size}")
    h = (b - a) / n
    local_n = n // size
    local_a = a + (rank * local_n) * h
    local_b = local_a + local_n * h
    return Share(local_a, local_b, local_n, h)


def _local_integral(comm: Communicator, a: float, b: float, n: int) -> float:
    share = local_share(a, b, n, comm.rank, comm.size)
    return trap(share.local_a, share.local_b, share.local_n, share.h)


def integrate_send_recv(comm: Communicator, a: float, b: float, n: int) -> float | None:
    """Integrate, gathering partial results on rank 0 with messages."""
    local_int = _local_integral(comm, a, b, n)
    if comm.rank != _ROOT:
        comm.send(local_int, _ROOT, 0)
        return None
    total_int = local_int
    for source in range(1, comm.size):
        received, _ = comm.recv(source, 0)
        total_int += received
    return total_int


def integrate_reduce(comm: Communicator, a: float, b: float, n: int) -> float | None:
    """Integrate, summing partial results on rank 0 with a reduction."""
    local_int = _local_integral(comm, a, b, n)
    return comm.reduce(local_int, SUM, _ROOT)


def main(argv: list[str] | None = None) -> int:
    """Estimate the integral on several ranks and print the result."""
    parser = argparse.ArgumentParser(
        prog="ranklab-trap", description="Parallel trapezoidal-rule integration."
    )
    parser.add_argument(
        "--method",
        choices=("send-recv", "reduce"),
        default="send-recv",
        help="how partial results are combined",
    )
    parser.add_argument("-p", "--processes", type=int, default=1)
    parser.add_argument("-n", "--trapezoids", type=int, default=None)
    parser.add_argument("-a", type=float, default=None, help="left endpoint")
    parser.add_argument("-b", type=float, default=None, help="right endpoint")
    args = parser.parse_args(argv)

    if args.method == "send-recv":
        default_a, default_b, default_n = SEND_RECV_DEFAULTS
        target = integrate_send_recv
    else:
        default_a, default_b, default_n = REDUCE_DEFAULTS
        target = integrate_reduce
    a = default_a if args.a is None else args.a
    b = default_b if args.b is None else args.b
    n = default_n if args.trapezoids is None else args.trapezoids
    if args.processes < 1:
        parser.error("the number of processes must be at least 1")
    if n < 1:
        parser.error("the number of trapezoids must be at least 1")

    start_time = time.perf_counter()
    total_int = run(args.processes, target, a, b, n)[_ROOT]
    elapsed = time.perf_counter() - start_time

    print(f"With n = {n} trapezoids, our estimate")
    print(f"of the integral from {a:f} to {b:f} = {total_int:.15e}")
    print(f"Elapsed time = {elapsed:.6f} seconds")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())