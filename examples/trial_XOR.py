"""
XOR Problem Implementation

This module evolves agents solving the classic XOR (exclusive OR) problem.

The XOR Problem:
    XOR is a two-input, one-output boolean function where the output is True
    only when the inputs differ:
        Input (0, 0) → Output 0
        Input (0, 1) → Output 1
        Input (1, 0) → Output 1
        Input (1, 1) → Output 0

    Agents have no node biases, so a third input fixed at 1.0 is supplied
    to play that role. Values read from the input and hidden layers pass
    through the layers' activation functions; output values are raw sums.

Fitness Function:
    Fitness = 4.0 - Σ(output - target)²

    Maximum fitness of 4.0 is achieved when all four XOR cases produce exact outputs.

Classes:
    Trial_XOR: Trial evolving agents that compute XOR

Usage:
    config = Config("config_xor.ini")
    trial = Trial_XOR(config)
    trial.run(num_jobs=1)
"""

from pathlib import Path

from topoagent     import Agent
from topoagent.run import Config, Trial

class Trial_XOR(Trial):
    """
    Trial evolving agents for the XOR boolean function.

    Problem Definition:
        Inputs: 2 binary values (0 or 1) plus a constant 1.0
        Output: 1 value (XOR of the binary inputs)
        Training cases: All 4 possible input combinations

    Implemented Methods:
        _evaluate_fitness(agent): Test agent on all 4 XOR cases
        _report_progress(): Display generation statistics and XOR truth table
        _final_report(): Display the evolved agent structure
    """

    def __init__(self, config: Config, suppress_output: bool = False, report_every: int = 100):
        """
        Initialize the XOR trial.

        Parameters:
            config:          Configuration parameters (population size, mutation rates, etc.)
            suppress_output: If True, suppress progress and final reports
            report_every:    Number of generations between progress reports
        """
        super().__init__(config, suppress_output)
        self._report_every = report_every

        self.xor_inputs  = [[0.0, 0.0, 1.0], [0.0, 1.0, 1.0], [1.0, 0.0, 1.0], [1.0, 1.0, 1.0]]
        self.xor_outputs = [[0.0],           [1.0],           [1.0],           [0.0]]

    def _evaluate_fitness(self, agent: Agent) -> float:
        """
        Evaluate agent fitness on the four XOR inputs.

        Parameters:
            agent: The agent to evaluate

        Returns:
            Fitness score (maximum 4.0 for perfect XOR solution)
        """
        fitness = 4.0  # max possible fitness
        for inputs, expected_output in zip(self.xor_inputs, self.xor_outputs):
            output   = agent.calculate(inputs)
            error    = output[0] - expected_output[0]
            fitness -= error ** 2
        return float(fitness)

    def _report_progress(self):
        """
        Print a report describing the current generation.
        """
        if self._generation_counter % self._report_every:
            return

        fittest, fitness = self._population.get_fittest_agent()

        s  = f"===============\n"
        s += f"GENERATION {self._generation_counter:04d}\n"
        s += f"population size = {len(self._population.agents)}\n"
        s += f"maximum fitness = {fitness:.4f}\n"
        s += f"hidden nodes    = {fittest.hidden_count}\n"
        s += f"connections     = {fittest.connection_count}\n"
        s += '\n'

        s += "input             output   target  error\n"
        s += "----------------------------------------\n"
        for inputs, expected_output in zip(self.xor_inputs, self.xor_outputs):
            output = fittest.calculate(inputs)[0]
            error  = abs(output - expected_output[0])
            s += f"{inputs} -> {output:.4f}    {expected_output[0]}   {error:.4f}\n"

        print(s)

    def _final_report(self):
        """
        Display the structure of the fittest agent.
        """
        fittest, fitness = self._population.get_fittest_agent()
        status = "FAILED" if self.failed else "SUCCESS"
        print(f"\n[{status}] after {self._generation_counter} generations, fitness={fitness:.4f}\n")
        print(fittest)

if __name__ == "__main__":
    config = Config(str(Path(__file__).parent / "config_xor.ini"))
    trial  = Trial_XOR(config)
    trial.run(num_jobs=1)
