"""
Agent Population Module

This module implements the Population class, the container of the agents
making up one generation, and the elitist scheme that spawns the next one.

Classes:
    Population: Agents of the current generation, with their fitness
"""

import numpy as np
from typing import TYPE_CHECKING

from topoagent.genotype import Agent, reproduce

if TYPE_CHECKING:
    from topoagent.run.config import Config

class Population:
    """
    A population of evolving agents.

    Selection is elitist and asexual: the fittest agent of a generation survives
    unchanged and every other slot of the next generation is filled with a child
    reproduced from it. All random draws come from the population's generator,
    so a seeded population evolves deterministically.

    Public Attributes:
        agents:  List of the agents in the current generation
        fitness: Fitness of each agent (same order as 'agents'), None until evaluated

    Public Methods:
        get_fittest_agent():     Return the agent with the highest fitness
        spawn_next_generation(): Replace the agents with the champion and its offspring
    """

    def __init__(self, config: 'Config', rng: np.random.Generator | None = None):
        """
        Initialize the population with disconnected agents.

        Parameters:
            config: Stores configuration parameters
            rng:    Source of random draws; if None, one is seeded from 'config.seed'
        """
        self._config = config
        self._rng    = rng if rng is not None else np.random.default_rng(config.seed)

        self.agents : list[Agent]        = Agent.create_agents(config.population_size,
                                                               config.num_inputs,
                                                               config.num_outputs,
                                                               config.activation_functions)
        self.fitness: list[float | None] = [None] * len(self.agents)

    def get_fittest_agent(self) -> tuple[Agent, float]:
        """
        Return the fittest agent and its fitness.
        On ties the agent appearing first wins.

        Raises:
            RuntimeError: If the population has not been evaluated or is empty
        """
        if not self.agents:
            raise RuntimeError("population is empty")
        if any(value is None for value in self.fitness):
            raise RuntimeError("population has not been evaluated")

        idx = int(np.argmax(self.fitness))
        return self.agents[idx], self.fitness[idx]

    def spawn_next_generation(self) -> None:
        """
        Create the next generation: the fittest agent plus
        'population_size - 1' children reproduced from it.
        """
        champion, _ = self.get_fittest_agent()

        offspring = [reproduce(champion, self._config, rng=self._rng)
                     for _ in range(self._config.population_size - 1)]

        self.agents  = [champion] + offspring
        self.fitness = [None] * len(self.agents)
