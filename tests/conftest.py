import matplotlib
matplotlib.use('Agg')

import numpy as np
import pytest

from config import LSystemConfig, SpaceColonizationConfig


@pytest.fixture
def branching_config():
    """F -> F[+F][-F] with no leaf symbol."""
    return LSystemConfig(
        depth=2,
        axiom='F',
        rules={'F': 'F[+F][-F]'},
        min_leaf_count=0,
        max_leaf_count=0,
        random_seed=0,
    )


@pytest.fixture
def capped_sca_config():
    return SpaceColonizationConfig(
        max_iterations=60,
        random_seed=0,
    )


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
