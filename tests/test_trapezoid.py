import math

import pytest

from ranklab.comm import run
from ranklab.trapezoid import (
    f,
    integrate_reduce,
    integrate_send_recv,
    local_share,
    main,
    trap,
)


def test_f_vanishes_at_zero():
    assert f(0.0) == 0.0


def test_f_positive_on_interval():
    assert all(f(x / 10) > 0 for x in range(1, 100))


def test_f_outside_domain_raises():
    with pytest.raises(ValueError):
        f(-2.0)


def test_trap_with_no_trapezoids_is_zero():
    assert trap(1.0, 1.0, 0, 0.5) == 0.0


def test_trap_converges_as_count_grows():
    coarse = trap(1.0, 5.0, 2000, 4.0 / 2000)
    fine = trap(1.0, 5.0, 4000, 4.0 / 4000)
    assert math.isclose(coarse, fine, rel_tol=1e-5)


def test_trap_is_additive_over_adjacent_intervals():
    whole = trap(0.0, 2.0, 200, 0.01)
    left = trap(0.0, 1.0, 100, 0.01)
    right = trap(1.0, 2.0, 100, 0.01)
    assert math.isclose(whole, left + right, rel_tol=1e-12)


def test_local_shares_tile_the_interval():
    shares = [local_share(0.0, 10.0, 1000, rank, 4) for rank in range(4)]
    assert shares[0].local_a == 0.0
    assert all(share.local_n == 250 for share in shares)
    for before, after in zip(shares, shares[1:]):
        assert math.isclose(before.local_b, after.local_a)
    assert math.isclose(shares[-1].local_b, 10.0)


def test_local_share_drops_remainder():
    share = local_share(0.0, 1.0, 10, 2, 3)
    assert share.local_n == 3
    assert math.isclose(share.local_a, 0.6)


@pytest.mark.parametrize(
    "args",
    [(0.0, 1.0, 0, 0, 1), (0.0, 1.0, 10, 0, 0), (0.0, 1.0, 10, 3, 3)],
)
def test_local_share_rejects_bad_arguments(args):
    with pytest.raises(ValueError):
        local_share(*args)


def test_single_rank_matches_serial_rule():
    result = run(1, integrate_send_recv, 1.0, 5.0, 800)
    assert result == [trap(1.0, 5.0, 800, 4.0 / 800)]


def test_parallel_send_recv_matches_single_rank():
    serial = run(1, integrate_send_recv, 0.0, 10.0, 1200)[0]
    parallel = run(4, integrate_send_recv, 0.0, 10.0, 1200)
    assert math.isclose(parallel[0], serial, rel_tol=1e-12)
    assert parallel[1:] == [None, None, None]


def test_reduce_matches_send_recv():
    via_messages = run(3, integrate_send_recv, 1.0, 5.0, 900)[0]
    via_reduce = run(3, integrate_reduce, 1.0, 5.0, 900)
    assert math.isclose(via_reduce[0], via_messages, rel_tol=1e-12)
    assert via_reduce[1:] == [None, None]


def test_main_prints_estimate(capsys):
    assert main(["-n", "1000", "-p", "2"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "With n = 1000 trapezoids, our estimate"
    assert lines[1].startswith("of the integral from 0.000000 to 10.000000 = ")
    expected = run(2, integrate_send_recv, 0.0, 10.0, 1000)[0]
    assert lines[1].endswith(f"{expected:.15e}")
    assert lines[2].startswith("Elapsed time = ")


def test_main_reduce_uses_its_own_interval(capsys):
    assert main(["--method", "reduce", "-n", "400"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[1].startswith("of the integral from 1.000000 to 5.000000 = ")


def test_main_rejects_zero_trapezoids():
    with pytest.raises(SystemExit):
        main(["-n", "0"])