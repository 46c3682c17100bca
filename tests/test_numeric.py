"""Tests for numeric helpers."""

import random

from draft_scout.utils.numeric import clamp, mean, resolve_rng, round_half_up


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(-0.5) == 0
    assert round_half_up(10.49) == 10


def test_clamp_and_mean():
    assert clamp(120, 0, 100) == 100
    assert clamp(-3, 0, 100) == 0
    assert mean([]) == 0.0
    assert mean(x for x in (1, 2, 3)) == 2


def test_resolve_rng_keeps_injected_generator():
    rng = random.Random(1)
    assert resolve_rng(rng) is rng
    assert isinstance(resolve_rng(None), random.Random)
