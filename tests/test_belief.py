"""
Tests for the tabular POMDP and the discrete belief updater.
"""

import pytest
import numpy as np

from pysarsop import DimensionError, DiscreteUpdater, POMDP
from pysarsop.utils import validate_belief


def _machine_pomdp():
    """Two-state maintenance problem used across tests."""
    states = ["healthy", "failed"]
    actions = ["ignore", "repair"]
    observations = ["obs1", "obs2"]

    T = {
        "ignore": np.array([[0.9, 0.1], [0.1, 0.9]]),
        "repair": np.array([[1.0, 0.0], [1.0, 0.0]]),
    }
    Z = {
        "ignore": np.array([[0.8, 0.2], [0.2, 0.8]]),
        "repair": np.array([[0.5, 0.5], [0.5, 0.5]]),
    }
    R = {
        "ignore": np.array([[10.0, -100.0], [-100.0, 10.0]]),
        "repair": np.array([[-5.0, -5.0], [-5.0, -5.0]]),
    }
    return POMDP(S=states, A=actions, O=observations, T=T, Z=Z, R=R, gamma=0.95)


def test_belief_update_normalized():
    """Test that belief update returns normalized distribution."""
    updater = DiscreteUpdater(_machine_pomdp())
    belief = np.array([0.7, 0.3])

    new_belief = updater.update(belief, "ignore", "obs1")

    assert np.isclose(new_belief.sum(), 1.0), "Belief should be normalized"
    assert np.all(new_belief >= 0), "Belief should be non-negative"
    assert len(new_belief) == 2, "Belief should have correct length"


def test_belief_update_matches_bayes_rule():
    """Test the posterior against a hand-computed Bayes filter step."""
    updater = DiscreteUpdater(_machine_pomdp())

    new_belief = updater.update([0.7, 0.3], "ignore", "obs1")

    predicted = np.array([0.7 * 0.9 + 0.3 * 0.1, 0.7 * 0.1 + 0.3 * 0.9])
    expected = np.array([0.8, 0.2]) * predicted
    assert np.allclose(new_belief, expected / expected.sum())


def test_update_accepts_one_based_action_index():
    """Test that the index returned by a policy selects the same action."""
    updater = DiscreteUpdater(_machine_pomdp())
    belief = [0.4, 0.6]

    by_index = updater.update(belief, 2, "obs2")
    by_label = updater.update(belief, "repair", "obs2")

    assert np.allclose(by_index, by_label)
    assert np.allclose(by_index, [1.0, 0.0])


def test_update_rejects_unknown_inputs():
    updater = DiscreteUpdater(_machine_pomdp())

    with pytest.raises(ValueError):
        updater.update([0.5, 0.5], "paint", "obs1")
    with pytest.raises(ValueError):
        updater.update([0.5, 0.5], 3, "obs1")
    with pytest.raises(ValueError):
        updater.update([0.5, 0.5], "ignore", "obs9")
    with pytest.raises(DimensionError):
        updater.update([0.2, 0.3, 0.5], "ignore", "obs1")


def test_zero_probability_observation_raises():
    pomdp = POMDP(
        S=["a", "b"], A=["stay"], O=["seen", "unseen"],
        T={"stay": np.eye(2)},
        Z={"stay": np.array([[1.0, 0.0], [1.0, 0.0]])},
        R={"stay": np.zeros((2, 2))},
    )
    updater = DiscreteUpdater(pomdp)

    with pytest.raises(ValueError):
        updater.update([0.5, 0.5], "stay", "unseen")


def test_initialize_belief_from_distribution():
    """Test that a label distribution becomes a vector in state order."""
    updater = DiscreteUpdater(_machine_pomdp())

    assert np.allclose(updater.initialize_belief({"failed": 0.25, "healthy": 0.75}), [0.75, 0.25])
    assert np.allclose(updater.initialize_belief({"healthy": 1.0}), [1.0, 0.0])
    assert np.allclose(updater.uniform_belief(), [0.5, 0.5])

    with pytest.raises(ValueError):
        updater.initialize_belief({"broken": 1.0})
    with pytest.raises(ValueError):
        updater.initialize_belief({"healthy": 0.5})


def test_pomdp_validation():
    """Test that malformed tables are rejected at construction."""
    good = _machine_pomdp()

    with pytest.raises(ValueError):
        POMDP(S=good.S, A=good.A, O=good.O,
              T={"ignore": good.T["ignore"]}, Z=good.Z, R=good.R)
    with pytest.raises(ValueError):
        POMDP(S=good.S, A=good.A, O=good.O,
              T={**good.T, "ignore": np.array([[0.5, 0.6], [0.5, 0.5]])}, Z=good.Z, R=good.R)
    with pytest.raises(ValueError):
        POMDP(S=good.S, A=good.A, O=good.O, T=good.T,
              Z={**good.Z, "repair": np.ones((2, 3)) / 3}, R=good.R)
    with pytest.raises(ValueError):
        POMDP(S=["x", "x"], A=["a"], O=["o"],
              T={"a": np.eye(2)}, Z={"a": np.ones((2, 1))}, R={"a": np.zeros((2, 2))})


def test_validate_belief():
    assert validate_belief([0.2, 0.8], 2)

    with pytest.raises(DimensionError):
        validate_belief([0.2, 0.8], 3)
    with pytest.raises(ValueError):
        validate_belief([-0.2, 1.2])
    with pytest.raises(ValueError):
        validate_belief([0.2, 0.2])
    with pytest.raises(ValueError):
        validate_belief([float("nan"), 1.0])


def test_pomdp_leaves_caller_tables_untouched():
    """Test that construction coerces copies instead of rewriting the input dicts."""
    T = {"stay": [[1.0, 0.0], [0.0, 1.0]]}
    Z = {"stay": [[1.0], [1.0]]}
    R = {"stay": [[0, 0], [0, 0]]}

    pomdp = POMDP(S=["a", "b"], A=["stay"], O=["o"], T=T, Z=Z, R=R)

    assert isinstance(T["stay"], list)
    assert isinstance(R["stay"], list)
    assert pomdp.T is not T
    assert pomdp.R["stay"].dtype == np.float64
