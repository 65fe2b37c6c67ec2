import configparser
import os
from typing import Callable

from topoagent.activations import activations

class Config:
    """
    Configuration parameters for creating, reproducing and evolving agents.

    Parameters are read from an INI file. Without a file, the Config holds the
    defaults below, which can then be overridden by setting attributes directly.

    The six mutation chances and 'max_weight' are what 'reproduce' reads,
    so a Config can be passed to it directly as the rate configuration.
    """

    # Names of the mutation chances, in [0, 1]
    CHANCES = ('new_node_chance',
               'new_connection_chance',
               'delete_node_chance',
               'delete_connection_chance',
               'change_weight_chance',
               'change_connection_chance')

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create a Config holding defaults.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, creates a default Config for manual attribute setting.

        Raises:
            FileNotFoundError: If 'config_file' does not exist
            ValueError:        If a parameter is out of range
        """

        # Default config for testing/manual setup
        if config_file is None:
            self.population_size   = 5
            self.num_inputs        = 2
            self.num_outputs       = 1
            self.activation_input  = 'tanh'
            self.activation_hidden = 'tanh'
            self.activation_output = None

            self.new_node_chance          = 0.10
            self.new_connection_chance    = 0.15
            self.delete_node_chance       = 0.05
            self.delete_connection_chance = 0.05
            self.change_weight_chance     = 0.20
            self.change_connection_chance = 0.15

            self.max_weight = 3.0

            self.max_number_generations    = 10_000
            self.fitness_termination_check = False
            self.fitness_threshold         = None

            self.seed = None
            return

        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file '{config_file}' not found")

        parser = configparser.ConfigParser()
        parser.read(config_file)

        # Sentinel for missing default values
        _NO_DEFAULT = object()

        # Helper function to safely parse values
        def get_value(section, key, value_type, default=_NO_DEFAULT):
            try:
                raw_value = parser.get(section, key)
                if raw_value.lower() == 'none':
                    return None
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == float:
                    return parser.getfloat(section, key)
                elif value_type == bool:
                    return parser.getboolean(section, key)
                elif value_type == str:
                    return raw_value
            except (configparser.NoSectionError, configparser.NoOptionError):
                if default is not _NO_DEFAULT:
                    return default
                raise

        # [POPULATION_INIT]

        # The number of agents in each generation.
        self.population_size = get_value('POPULATION_INIT', 'population_size', int)

        # The number of input slots, through which an agent receives inputs.
        self.num_inputs = get_value('POPULATION_INIT', 'num_inputs', int)

        # The number of output slots, to which an agent delivers outputs.
        self.num_outputs = get_value('POPULATION_INIT', 'num_outputs', int)

        # Activation function applied to values read from each layer.
        # Options: see 'basic_activations.py'.
        # The output layer is never read from, so its activation is optional.
        self.activation_input  = get_value('POPULATION_INIT', 'activation_input' , str, default='tanh')
        self.activation_hidden = get_value('POPULATION_INIT', 'activation_hidden', str, default='tanh')
        self.activation_output = get_value('POPULATION_INIT', 'activation_output', str, default=None)

        # [REPRODUCTION]

        # The probability that reproduction will append a new (unconnected) hidden node.
        self.new_node_chance = get_value('REPRODUCTION', 'new_node_chance', float)

        # The probability that reproduction will add a connection between random slots.
        self.new_connection_chance = get_value('REPRODUCTION', 'new_connection_chance', float)

        # The probability that reproduction will delete a random hidden node.
        # Connections to and from the deleted node are rewired, not deleted.
        self.delete_node_chance = get_value('REPRODUCTION', 'delete_node_chance', float)

        # The probability that reproduction will delete a random connection.
        self.delete_connection_chance = get_value('REPRODUCTION', 'delete_connection_chance', float)

        # The probability that reproduction will replace the weight of a random connection.
        self.change_weight_chance = get_value('REPRODUCTION', 'change_weight_chance', float)

        # The probability that reproduction will move both endpoints of a random connection.
        self.change_connection_chance = get_value('REPRODUCTION', 'change_connection_chance', float)

        # [CONNECTION]

        # New weights are drawn uniformly from [-max_weight, max_weight).
        self.max_weight = get_value('CONNECTION', 'max_weight', float)

        # [TERMINATION]

        # The number of generations after which to stop the run.
        self.max_number_generations = get_value('TERMINATION', 'max_number_generations', int)

        # Whether to stop the run once the fittest agent reaches 'fitness_threshold'.
        self.fitness_termination_check = get_value('TERMINATION', 'fitness_termination_check', bool, default=False)
        self.fitness_threshold         = get_value('TERMINATION', 'fitness_threshold', float, default=None)

        # [RANDOM] (optional section)

        # Seed for the random generator driving reproduction. Use "None" for a fresh seed.
        self.seed = get_value('RANDOM', 'seed', int, default=None)

        self.validate()

    def validate(self) -> None:
        """
        Check that the parameters are within range.

        Raises:
            ValueError: If a chance is outside [0, 1], the population is empty,
                        'max_weight' is not positive, a layer size is negative
                        or an activation name is unknown
        """
        for name in self.CHANCES:
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"'{name}' must be in [0, 1], got {value}")

        if self.population_size < 1:
            raise ValueError(f"'population_size' must be at least 1, got {self.population_size}")

        if not self.max_weight > 0:
            raise ValueError(f"'max_weight' must be positive, got {self.max_weight}")

        if self.num_inputs < 0 or self.num_outputs < 0:
            raise ValueError(f"Layer sizes must be non-negative, got inputs={self.num_inputs}, outputs={self.num_outputs}")

        for name in (self.activation_input, self.activation_hidden):
            if name not in activations:
                raise ValueError(f"Invalid activation function '{name}'")
        if self.activation_output is not None and self.activation_output not in activations:
            raise ValueError(f"Invalid activation function '{self.activation_output}'")

        if self.fitness_termination_check and self.fitness_threshold is None:
            raise ValueError("'fitness_threshold' is required when 'fitness_termination_check' is True")

    @property
    def activation_functions(self) -> tuple[Callable[[float], float], ...]:
        """
        The activation functions for the input, hidden and (if set) output layers.
        These are the registry's function objects, shared by every agent created from them.
        """
        names = [self.activation_input, self.activation_hidden]
        if self.activation_output is not None:
            names.append(self.activation_output)
        return tuple(activations[name] for name in names)
