import pytest

from questtown.core.rng import RNG


def test_rng_determinism_same_seed() -> None:
    rng_a = RNG(12345)
    rng_b = RNG(12345)

    choices_a = [rng_a.choice(["a", "b", "c"]) for _ in range(10)]
    choices_b = [rng_b.choice(["a", "b", "c"]) for _ in range(10)]

    assert choices_a == choices_b


def test_rng_choice_rejects_empty_sequence() -> None:
    with pytest.raises(ValueError):
        RNG(1).choice([])


def test_rng_choice_covers_every_element_eventually() -> None:
    rng = RNG(7)
    seen = {rng.choice(["x", "y", "z"]) for _ in range(200)}
    assert seen == {"x", "y", "z"}
