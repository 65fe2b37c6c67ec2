"""
Agent Module

This module implements the Agent class, the data model of an evolving
feed-forward network whose topology changes through reproduction.

Classes:
    Agent: A network made of three value layers and a list of index-addressed connections
"""

import copy
import numpy as np
from typing import Callable, Sequence, TYPE_CHECKING

from topoagent.activations         import activation_codes, activation_name
from topoagent.errors              import ConstructionError
from topoagent.genotype            import reproduction
from topoagent.genotype.connection import Connection, Layer
from topoagent.phenotype           import evaluator

if TYPE_CHECKING:
    from topoagent.run.config import Config

class Agent:
    """
    A candidate network with mutable topology.

    An agent stores three value layers (input, hidden, output) as numeric buffers
    plus a list of connections. A connection addresses its endpoints by
    (layer, index) pairs rather than by stable node identifiers, so deleting a
    hidden node compacts the hidden layer and invalidates indices; reproduction
    repairs every affected connection when that happens.

    A new agent has no hidden nodes and no connections. Its structure only ever
    changes through reproduction, which returns a new agent and leaves the parent
    untouched. The hidden and output buffers are scratch space, overwritten on
    every evaluation, so a single agent must not be evaluated concurrently.

    The activation functions are shared by reference between an agent and all
    its clones and offspring; an agent never modifies them.

    Public Attributes:
        input_count:         Size of the input layer (fixed)
        output_count:        Size of the output layer (fixed)
        hidden_count:        Current number of hidden nodes
        connection_count:    Current number of connections (always len(connections))
        inputs:              Input layer buffer
        hidden:              Hidden layer buffer
        outputs:             Output layer buffer
        connections:         List of Connection objects
        activation_by_layer: One activation function per layer (input, hidden[, output])

    Public Methods:
        layer_size(layer):             Current size of a layer
        sort_connections():            Stable sort by (start layer, end layer)
        clone():                       Copy of the agent sharing its activation functions
        dangling_connections():        Connections whose indices fall outside their layers
        is_consistent():               Whether counts and indices are all in sync
        describe():                    Structured summary of the topology
        calculate(input_vector):       Run an accumulation pass, see 'evaluator.calculate'
        reproduce(rates, ...):         Produce a mutated child, see 'reproduction.reproduce'

    Class Methods:
        create_agents(count, inputs, outputs, activations): Create disconnected agents
    """

    def __init__(self,
                 input_count : int,
                 output_count: int,
                 activations : Sequence[Callable[[float], float]]):
        """
        Initialize a disconnected agent (no hidden nodes, no connections).

        Parameters:
            input_count:  Number of input slots
            output_count: Number of output slots
            activations:  Activation functions for the input and hidden layers, and
                          optionally the output layer (never used as a source)

        Raises:
            ConstructionError: If a count is negative or fewer than two activations are given
        """
        if input_count < 0 or output_count < 0:
            raise ConstructionError(f"Layer sizes must be non-negative, got inputs={input_count}, outputs={output_count}")
        if len(activations) < 2:
            raise ConstructionError(f"An activation function is needed for the input and hidden layers, got {len(activations)}")

        self.input_count     : int = int(input_count)
        self.output_count    : int = int(output_count)
        self.hidden_count    : int = 0
        self.connection_count: int = 0

        self.inputs : np.ndarray = np.zeros(self.input_count,  dtype=np.float64)
        self.hidden : np.ndarray = np.zeros(0,                 dtype=np.float64)
        self.outputs: np.ndarray = np.zeros(self.output_count, dtype=np.float64)

        self.connections: list[Connection] = []

        # Shared with every clone, never copied
        self.activation_by_layer: tuple[Callable[[float], float], ...] = tuple(activations)

    @classmethod
    def create_agents(cls,
                      count      : int,
                      inputs     : int,
                      outputs    : int,
                      activations: Sequence[Callable[[float], float]]) -> list['Agent']:
        """
        Create a number of independent, disconnected agents.

        Parameters:
            count:       Number of agents to create
            inputs:      Number of input slots of each agent
            outputs:     Number of output slots of each agent
            activations: Activation functions, shared by all the agents created

        Returns:
            List of 'count' agents

        Raises:
            ConstructionError: If a count is negative or the activation set is incomplete
        """
        if count < 0:
            raise ConstructionError(f"Cannot create a negative number of agents ({count})")
        activations = tuple(activations)
        return [cls(inputs, outputs, activations) for _ in range(count)]

    def layer_size(self, layer: int) -> int:
        """Current number of slots in 'layer'."""
        if layer == Layer.INPUT:
            return self.input_count
        if layer == Layer.HIDDEN:
            return self.hidden_count
        if layer == Layer.OUTPUT:
            return self.output_count
        raise ValueError(f"Unknown layer: {layer}")

    def layer_buffer(self, layer: int) -> np.ndarray:
        """Value buffer of 'layer'."""
        return (self.inputs, self.hidden, self.outputs)[Layer(layer)]

    def sort_connections(self) -> None:
        """
        Order connections by (start layer, end layer).
        The sort is stable: connections sharing a key keep their relative order.
        """
        self.connections.sort(key=lambda conn: conn.sort_key)

    def clone(self) -> 'Agent':
        """
        Create a copy of this agent.

        Structure and buffers are copied; the activation functions are shared.
        """
        other = copy.copy(self)
        other.inputs      = self.inputs.copy()
        other.hidden      = self.hidden.copy()
        other.outputs     = self.outputs.copy()
        other.connections = [conn.copy() for conn in self.connections]
        return other

    def dangling_connections(self) -> list[Connection]:
        """
        Return the connections whose start or end index is out of bounds
        for the current size of their layer.
        """
        return [conn for conn in self.connections
                if not (0 <= conn.start_idx < self.layer_size(conn.start_layer) and
                        0 <= conn.end_idx   < self.layer_size(conn.end_layer))]

    def is_consistent(self) -> bool:
        """
        Check the structural invariants of the agent:
         + the connection count matches the connection list
         + the hidden count matches the hidden buffer
         + no connection references a slot outside its layer
        """
        return self.connection_count == len(self.connections) and \
               self.hidden_count     == len(self.hidden)      and \
               not self.dangling_connections()

    def describe(self) -> dict:
        """
        Summarize the agent's topology.

        Connections are sorted first, so the listing follows evaluation order.
        The sort is done in place: 'connections' is left reordered, which changes
        which connection a later reproduction picks for a given random draw
        (exactly as evaluating the agent would).

        Returns:
            Dictionary with the following structure:
            {
                "hidden_count": 1,
                "connection_count": 2,
                "connections": [
                    {"from": (0, 0), "to": (1, 0), "weight":  0.5},
                    {"from": (1, 0), "to": (2, 0), "weight": -1.5}
                ]
            }
        """
        self.sort_connections()
        connections = []
        for conn in self.connections:
            connections.append({
                "from"  : (int(conn.start_layer), conn.start_idx),
                "to"    : (int(conn.end_layer), conn.end_idx),
                "weight": conn.weight
            })

        return {
            "hidden_count"    : self.hidden_count,
            "connection_count": self.connection_count,
            "connections"     : connections
        }

    def calculate(self, input_vector: Sequence[float]) -> np.ndarray:
        """Run an accumulation pass, see 'topoagent.phenotype.evaluator.calculate'."""
        return evaluator.calculate(self, input_vector)

    def reproduce(self,
                  rates     : 'Config',
                  max_weight: float | None = None,
                  rng       : np.random.Generator | None = None) -> 'Agent':
        """Produce a mutated child, see 'topoagent.genotype.reproduction.reproduce'."""
        return reproduction.reproduce(self, rates, max_weight, rng)

    def __str__(self):
        summary = self.describe()
        codes   = [activation_codes.get(activation_name(func), "???") for func in self.activation_by_layer]

        lines = [f"Nodes: {summary['hidden_count']}",
                 f"Connections: {summary['connection_count']}",
                 f"Activations: {','.join(codes)}",
                 ""]
        for idx, conn in enumerate(summary["connections"]):
            lines.append(f"Connection: {idx}")
            lines.append(f"  From   : {conn['from'][0]}, {conn['from'][1]}")
            lines.append(f"  To     : {conn['to'][0]}, {conn['to'][1]}")
            lines.append(f"  Weight : {conn['weight']}")
        return "\n".join(lines)

    def __repr__(self):
        return (f"Agent(inputs={self.input_count}, hidden={self.hidden_count}, "
                f"outputs={self.output_count}, connections={self.connection_count})")
