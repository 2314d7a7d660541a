"""Introductory message-passing programs.

Each program takes a communicator and returns the lines its rank prints.
"""

from __future__ import annotations

import argparse
from typing import Callable

from ranklab.comm import ANY_SOURCE, ANY_TAG, SUM, Communicator, run

_ROOT = 0


def _greeting(comm: Communicator) -> str:
    return f"Msg do processo {comm.rank} of {comm.size}!"


def _root_header(comm: Communicator) -> str:
    return f"Processo centralizador em execução: {comm.rank} of {comm.size}!"


def hello(comm: Communicator) -> list[str]:
    """Report the number of ranks and this rank."""
    return [
        f"Número de processos: {comm.size} Rank do processos corrente: {comm.rank} "
    ]


def greetings(comm: Communicator) -> list[str]:
    """Every rank greets rank 0, which receives in rank order."""
    if comm.rank != _ROOT:
        comm.send(_greeting(comm), _ROOT, 0)
        return []
    lines = [_root_header(comm)]
    for source in range(1, comm.size):
        message, _ = comm.recv(source, 0)
        lines.append(f"O processo {comm.rank} recebeu a seguinte mensagem: {message}")
    return lines


def greetings_any_source(comm: Communicator) -> list[str]:
    """Like ``greetings``, but rank 0 takes messages in arrival order."""
    if comm.rank != _ROOT:
        comm.send(_greeting(comm), _ROOT, 0)
        return []
    lines = [_root_header(comm)]
    for _ in range(1, comm.size):
        message, _ = comm.recv(ANY_SOURCE, ANY_TAG)
        lines.append(f"O processo {comm.rank} recebeu a seguinte mensagem: {message}")
    return lines


def greetings_status(comm: Communicator) -> list[str]:
    """Like ``greetings_any_source``, also reporting each message's status."""
    if comm.rank != _ROOT:
        comm.send(_greeting(comm), _ROOT, 0)
        return []
    lines = [_root_header(comm)]
    for _ in range(1, comm.size):
        message, status = comm.recv(ANY_SOURCE, ANY_TAG)
        lines.append(
            f"O processo {comm.rank} recebeu a seguinte mensagem: {message} "
            f"(status.MPI_SOURCE: {status.source} status.MPI_TAG: {status.tag})"
        )
    return lines


def broadcast_number(comm: Communicator) -> list[str]:
    """Rank 0 chooses a number and broadcasts it to every rank."""
    lines = []
    number = None
    if comm.rank == _ROOT:
        number = 42
        lines.append(
            f"Processo {comm.rank} definiu o número {number} "
            "para ser enviado aos demais."
        )
    number = comm.bcast(number, _ROOT)
    lines.append(f"Processo {comm.rank} recebeu o número: {number}")
    return lines


def reduce_sum(comm: Communicator) -> list[str]:
    """Sum ``rank + 1`` over all ranks with a collective reduction."""
    total = comm.reduce(comm.rank + 1, SUM, _ROOT)
    if comm.rank == _ROOT:
        return [f"Soma global = {total}"]
    return []


def reduce_sum_manual(comm: Communicator) -> list[str]:
    """Sum ``rank + 1`` over all ranks with point-to-point messages."""
    local_value = comm.rank + 1
    if comm.rank != _ROOT:
        comm.send(local_value, _ROOT, 0)
        return []
    total = local_value
    for source in range(1, comm.size):
        received, _ = comm.recv(source, 0)
        total += received
    return [f"Soma global = {total}"]


PROGRAMS: dict[str, Callable[[Communicator], list[str]]] = {
    "hello": hello,
    "greetings": greetings,
    "greetings-any-source": greetings_any_source,
    "greetings-status": greetings_status,
    "bcast": broadcast_number,
    "reduce": reduce_sum,
    "reduce-manual": reduce_sum_manual,
}


def main(argv: list[str] | None = None) -> int:
    """Run one example program on a number of ranks and print its output."""
    parser = argparse.ArgumentParser(
        prog="ranklab-examples", description="Run a message-passing example."
    )
    parser.add_argument("program", choices=sorted(PROGRAMS))
    parser.add_argument(
        "-n", "--processes", type=int, default=1, help="number of ranks (default 1)"
    )
    args = parser.parse_args(argv)
    if args.processes < 1:
        parser.error("the number of processes must be at least 1")

    for lines in run(args.processes, PROGRAMS[args.program]):
        for line in lines:
            print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())