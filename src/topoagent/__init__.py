"""
topoagent - neuroevolution of small feed-forward agents by topology mutation.

Agents are networks whose hidden-node count and connection wiring change from
one generation to the next through reproduction, rather than being trained by
gradient descent.

Main components:
- genotype:    Agent data model (layers, connections) and reproduction (mutation)
- phenotype:   Evaluation of an agent on an input sample (single accumulation pass)
- pool:        Population of agents and elitist next-generation spawning
- run:         Configuration and the trial (evolution loop) framework
- activations: Activation functions shared by agents

Example:
    >>> import numpy as np
    >>> from topoagent import Agent, Config, calculate, reproduce, tanh_activation
    >>> config = Config()
    >>> agents = Agent.create_agents(5, 2, 1, [tanh_activation, tanh_activation])
    >>> rng    = np.random.default_rng(0)
    >>> child  = reproduce(agents[0], config, rng=rng)
    >>> calculate(child, [0.5, 1.0]).shape
    (1,)
"""

__version__ = "0.1.0"

from topoagent.activations import activations, tanh_activation, identity_activation
from topoagent.errors      import ConstructionError, ShapeMismatchError
from topoagent.genotype    import Agent, Connection, Layer, reproduce
from topoagent.phenotype   import calculate
from topoagent.pool        import Population
from topoagent.run         import Config, Trial

def create_agents(count, input_count, output_count, activation_set) -> list[Agent]:
    """Create 'count' disconnected agents, see 'Agent.create_agents'."""
    return Agent.create_agents(count, input_count, output_count, activation_set)

def describe(agent: Agent) -> dict:
    """Structured summary of an agent's topology, see 'Agent.describe'."""
    return agent.describe()

__all__ = [
    "Agent",
    "Config",
    "Connection",
    "ConstructionError",
    "Layer",
    "Population",
    "ShapeMismatchError",
    "Trial",
    "activations",
    "calculate",
    "create_agents",
    "describe",
    "identity_activation",
    "reproduce",
    "tanh_activation",
]
