"""
Agent Trial Module

This module defines the abstract base class for evolution trials with built-in
support for CPU-based parallelization using joblib.

A trial represents one independent run of the evolutionary loop: a population
of agents is evaluated, the fittest agent reproduces, and the process repeats
until a solution is found or the maximum number of generations is reached.
"""

from abc    import ABC, abstractmethod
from joblib import Parallel, delayed

from topoagent.genotype   import Agent
from topoagent.pool       import Population
from topoagent.run.config import Config

class Trial(ABC):
    """
    Abstract base class for implementing an evolution trial.

    Subclasses must implement:
    - _evaluate_fitness(agent): Evaluate fitness for a single agent
    - _report_progress(): Display progress after each generation
    - _final_report(): Display final results

    Subclasses can override:
    - _reset(): Reset trial-specific state (call super()._reset())
    - _terminate(): Custom termination logic (default: max generations + fitness threshold)

    Public Methods:
        run(): Execute a complete trial

    Parallelization of fitness evaluation for agents:
        num_jobs=1:  Serial evaluation (no parallelization)
        num_jobs>1:  Use specified number of parallel processes
        num_jobs=-1: Use all available CPU cores
    """

    def __init__(self, config: Config, suppress_output: bool = False):
        """
        Initialize the trial.

        Parameters:
            config:          Configuration parameters
            suppress_output: If True, suppress progress and final reports
        """
        self._config            : Config     = config
        self._generation_counter: int        = 0
        self._population        : Population = None
        self._suppress_output   : bool       = suppress_output
        self.failed             : bool       = True

    def run(self, num_jobs: int = 1):
        """
        Run the trial.

        Resets the trial state and runs the evolutionary
        loop until the terminate condition is met.

        Parameters:
            num_jobs: Number of parallel processes for fitness evaluation of agents
                      1 = serial (no parallelization)
                     -1 = use all available CPU cores
                     >1 = use specified number of processes
        """
        # Reset the trial state before starting a new run
        self._reset()

        # Create the initial population (disconnected agents)
        self._population = Population(self._config)

        # Evaluate the fitness of the initial population
        self._evaluate_fitness_all(num_jobs)

        if not self._suppress_output:
            self._report_progress()

        # Evolution loop
        while not self._terminate():
            self._generation_counter += 1

            # The fittest agent survives and reproduces
            self._population.spawn_next_generation()

            # Evaluate the fitness of each agent in the new generation
            self._evaluate_fitness_all(num_jobs)

            if not self._suppress_output:
                self._report_progress()

        if not self._suppress_output:
            self._final_report()

    def _reset(self):
        """
        Reset the trial state before starting a new run.

        Subclasses overriding this should call super()._reset() and then
        initialize their problem-specific data.
        """
        self._generation_counter = 0
        self.failed = True

    @abstractmethod
    def _evaluate_fitness(self, agent: Agent) -> float:
        """
        Evaluate and return the fitness of an agent.

        This method should run the agent on the problem domain (through
        'agent.calculate') and compute a fitness score. Higher is better.

        Parameters:
            agent: The agent to evaluate

        Returns:
            float: Fitness score for the agent
        """
        pass

    def _evaluate_fitness_all(self, num_jobs: int):
        """
        Evaluate fitness for all agents in the population.

        Uses serial or parallel evaluation based on num_jobs:
        - num_jobs=1: Sequential evaluation in single process
        - num_jobs>1 or -1: Parallel evaluation using joblib

        Parameters:
            num_jobs: Number of parallel processes for fitness evaluation
        """
        agents    = self._population.agents
        serialize = num_jobs == 1

        if serialize:
            self._population.fitness = [self._evaluate_fitness(agent) for agent in agents]
        else:
            fitness_all = Parallel(num_jobs)(delayed(self._evaluate_fitness)(agent) for agent in agents)
            self._population.fitness = list(fitness_all)

            # Workers evaluated copies; leave the connections in the order
            # a serial evaluation would have left them
            for agent in agents:
                agent.sort_connections()

    @abstractmethod
    def _report_progress(self):
        """
        Report trial progress after each generation.

        This method is suppressed by setting 'self._suppress_output' to 'True'.
        """
        pass

    @abstractmethod
    def _final_report(self):
        """
        Produce final report at the end of the trial.

        This method is suppressed by setting 'self._suppress_output' to 'True'.
        """
        pass

    def _terminate(self) -> bool:
        """
        Determine whether the trial should terminate.

        This default implementation stops the trial after a maximum number
        of generations and (optionally) also stops it once the fittest agent
        reaches a fitness threshold.

        Returns:
            bool: True if the trial should stop, False otherwise
        """
        # Has this trial run for too long?
        terminate = self._generation_counter >= self._config.max_number_generations

        # Check whether the fitness has reached a target threshold
        if self._config.fitness_termination_check:
            _, best_fitness = self._population.get_fittest_agent()

            success   = best_fitness >= self._config.fitness_threshold
            terminate = terminate or success

            if terminate:
                self.failed = not success

        return terminate
