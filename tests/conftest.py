from typing import Sequence

import numpy as np
import pytest

import config
from cell.cell import CellRegistry
from cell.energy import EnergyLedger
from neural.net import Net
from sim.settings import DynamicSettings
from world.world import World


def fixed_output_net(output_bias: Sequence[float]) -> Net:
    """
    A net that ignores its inputs: zero weights everywhere, so the output
    layer is sigmoid(output_bias).
    """
    arch = config.NET_ARCH
    weights = [np.zeros((n_out, n_in)) for n_in, n_out in zip(arch, arch[1:])]
    biases = [np.zeros(n_out) for n_out in arch[1:]]
    biases[-1] = np.asarray(output_bias, dtype=np.float64)
    return Net(arch, weights=weights, biases=biases)


@pytest.fixture
def world() -> World:
    return World.create(600, 600)


@pytest.fixture
def cells() -> CellRegistry:
    return CellRegistry()


@pytest.fixture
def ledger() -> EnergyLedger:
    return EnergyLedger()


@pytest.fixture
def settings() -> DynamicSettings:
    """Small, fast settings for testing."""
    return DynamicSettings(num_food=80, num_cells=20)
