# ranklab

A small toolkit for experimenting with message passing between ranked
workers. A group of `size` workers is started together, each knowing its own
rank (`0` to `size - 1`) and the size of the group. Workers talk through a
`Communicator` offering point-to-point messages and two collective
operations. Each worker runs as a thread inside one Python process.

## Modules

### `ranklab.comm`

- `run(size, target, *args)` starts `size` ranks, calls
  `target(comm, *args)` on each, waits for all of them and returns their
  results as a list ordered by rank. `size` must be at least 1. If a rank
  raises, the other ranks blocked in communication are released with
  `CommAborted` and the first original error is raised again from `run`.
- `Communicator` has `rank` and `size` attributes and these methods:
  - `send(obj, dest, tag=0)` sends a deep copy of `obj` to rank `dest`.
    Tags must be non-negative.
  - `recv(source=ANY_SOURCE, tag=ANY_TAG)` waits for a matching message and
    returns `(obj, status)`. `status` is a `Status` with `source` and `tag`
    fields.
  - `bcast(obj=None, root=0)` returns the root's `obj` on every rank.
  - `reduce(value, op=SUM, root=0)` combines one value from each rank with
    `op`, in rank order. The root gets the result and the other ranks get
    `None`.
- The operations `SUM`, `PROD`, `MAX` and `MIN` can be passed to `reduce`,
  as can any two-argument function.
- A rank number that is out of range raises `ValueError`.

### `ranklab.examples`

Small programs that run on every rank. Each takes a communicator and returns
the list of lines its rank produces.

- `hello` reports the group size and the rank.
- `greetings`: every rank other than 0 sends a greeting to rank 0, which
  receives them in rank order.
- `greetings_any_source`: the same, but rank 0 takes messages in the order
  they arrive.
- `greetings_status`: the same again, and each line also shows the source and
  tag of the message.
- `broadcast_number`: rank 0 broadcasts the number 42 to every rank.
- `reduce_sum` sums `rank + 1` over all ranks with `reduce`.
- `reduce_sum_manual` computes the same sum with explicit messages.

### `ranklab.trapezoid`

Estimates a definite integral of
`f(x) = exp(sin x · cos x) · ln(x + 1) · sqrt(x³ + x² + 1)`
with the trapezoidal rule, split across ranks.

- `f(x)` is the integrand.
- `trap(left_endpt, right_endpt, trap_count, base_len)` is the serial rule.
- `local_share(a, b, n, rank, size)` returns a `Share` with
  `local_a`, `local_b`, `local_n` and `h` for one rank. Each rank gets
  `n // size` trapezoids, so when `n` does not divide evenly the last
  trapezoids are not counted.
- `integrate_send_recv(comm, a, b, n)` gathers the partial results on rank 0
  with messages.
- `integrate_reduce(comm, a, b, n)` gathers them with a single `reduce`.

Both functions return the total on rank 0 and `None` on the other ranks.

## Installing

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## Using it from Python

```python
from ranklab.comm import run
from ranklab.examples import greetings

for lines in run(4, greetings):
    for line in lines:
        print(line)
```

```python
from ranklab.comm import run
from ranklab.trapezoid import integrate_reduce

total = run(4, integrate_reduce, 1.0, 5.0, 100_000)[0]
```

## Commands

```
ranklab-examples PROGRAM [-n PROCESSES]
```

This runs one example on `PROCESSES` ranks (default 1) and prints every
rank's lines in rank order. `PROGRAM` is one of `hello`, `greetings`,
`greetings-any-source`, `greetings-status`, `bcast`, `reduce` or
`reduce-manual`.

```
ranklab-trap [--method {send-recv,reduce}] [-p PROCESSES] [-n TRAPEZOIDS] [-a A] [-b B]
```

This runs the parallel trapezoidal rule and prints the number of trapezoids,
the interval, the estimate and the elapsed time. By default `send-recv`
integrates over [0, 10] with 2,000,000,000 trapezoids, and `reduce`
integrates over [1, 5] with 1,000,000,000. Those defaults take a very long
time in pure Python, so pass a smaller `-n` for quick runs.

## What it does not do

All ranks are threads in a single process. Nothing is distributed across
processes or machines, and because of the interpreter lock more ranks do not
make the integration faster. The package is for studying message-passing
patterns, not for high-performance computing.

## Running the tests

```
pytest
```