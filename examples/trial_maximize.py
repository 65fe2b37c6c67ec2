"""
Output Maximization Demo

A minimal evolution run: agents receive two inputs, a random value in [-1, 1)
and a constant 1.0 acting as a bias, and are rewarded for producing a large
output with as few hidden nodes as possible.

Fitness Function:
    Fitness = output / (hidden nodes + 1)

    All agents of a generation see the same input sample; a new sample is drawn
    for every generation, so an agent must score well regardless of the first
    input to stay the champion.

Classes:
    Trial_Maximize: Trial evolving agents to maximize their (size-penalized) output

Usage:
    config = Config("config_maximize.ini")
    trial  = Trial_Maximize(config)
    trial.run(num_jobs=1)
"""

import numpy as np
from pathlib import Path

from topoagent     import Agent
from topoagent.run import Config, Trial

class Trial_Maximize(Trial):
    """
    Trial rewarding agents for a large output on the current input sample.

    Implemented Methods:
        _evaluate_fitness(agent): Output divided by the number of hidden nodes + 1
        _report_progress(): Display the fitness of the champion every 'report_every' generations
        _final_report(): Display the structure of the champion
    """

    def __init__(self, config: Config, suppress_output: bool = False, report_every: int = 500):
        super().__init__(config, suppress_output)
        self._report_every = report_every
        self._sample_rng   = np.random.default_rng(config.seed)
        self._sample       = None

    def _reset(self):
        """Reset trial state."""
        super()._reset()
        self._sample_rng = np.random.default_rng(self._config.seed)

    def _evaluate_fitness_all(self, num_jobs: int):
        """Draw the input sample shared by every agent of this generation, then evaluate."""
        self._sample = [self._sample_rng.uniform(-1.0, 1.0), 1.0]
        super()._evaluate_fitness_all(num_jobs)

    def _evaluate_fitness(self, agent: Agent) -> float:
        output = agent.calculate(self._sample)
        return float(output[0]) / (agent.hidden_count + 1)

    def _report_progress(self):
        if self._generation_counter % self._report_every:
            return
        _, fitness = self._population.get_fittest_agent()
        print(f"Epoch: {self._generation_counter}")
        print(f"Best result: {fitness}")

    def _final_report(self):
        champion, fitness = self._population.get_fittest_agent()
        print(f"\nBest result: {fitness}\n")
        print(champion)

if __name__ == "__main__":
    config_file = Path(__file__).parent / "config_maximize.ini"
    trial = Trial_Maximize(Config(str(config_file)))
    trial.run(num_jobs=1)
