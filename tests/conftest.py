"""Pytest configuration and shared fixtures."""

import pytest
import sys
import numpy as np
from pathlib import Path
from unittest.mock import Mock

# Add the source root to the Python path
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir / "src"))


@pytest.fixture
def rates():
    """
    Build a rate configuration with every chance set to 0.0,
    except those given as keyword arguments.
    """
    from topoagent.run.config import Config

    def _rates(max_weight=3.0, **chances):
        config = Config()
        for name in Config.CHANCES:
            setattr(config, name, 0.0)
        for name, value in chances.items():
            assert name in Config.CHANCES, f"unknown chance '{name}'"
            setattr(config, name, value)
        config.max_weight = max_weight
        return config

    return _rates


@pytest.fixture
def scripted_rng():
    """
    Build a stand-in for numpy.random.Generator returning scripted draws.

    'random' is the value returned by every gate draw (a constant), 'integers'
    and 'uniform' are lists of values returned in order.
    """
    def _scripted_rng(random=0.0, integers=(), uniform=()):
        rng = Mock(spec=np.random.Generator)
        rng.random.return_value = random
        rng.integers.side_effect = list(integers)
        rng.uniform.side_effect  = list(uniform)
        return rng

    return _scripted_rng


@pytest.fixture
def build_agent():
    """
    Build an agent with a given structure.

    Connections are (start_layer, start_idx, end_layer, end_idx, weight) tuples.
    """
    from topoagent.activations import identity_activation
    from topoagent.genotype    import Agent, Connection

    def _build_agent(inputs=1, outputs=1, hidden=0, connections=(), activations=None):
        if activations is None:
            activations = (identity_activation, identity_activation)
        agent = Agent(inputs, outputs, activations)
        agent.hidden_count = hidden
        agent.hidden       = np.zeros(hidden)
        agent.connections  = [Connection(*fields) for fields in connections]
        agent.connection_count = len(agent.connections)
        return agent

    return _build_agent
