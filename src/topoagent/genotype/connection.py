"""
Agent Connection Module

This module implements the Layer enumeration and the Connection class
describing the weighted edges of an agent's network.

Classes:
    Layer:      Enumeration for the three value layers (INPUT, HIDDEN, OUTPUT)
    Connection: A weighted, feed-forward edge between two layer slots
"""

from enum import IntEnum

class Layer(IntEnum):
    """
    Agents have three layers: input, hidden, output.
    The integer value doubles as the index into the agent's activation set.
    """
    INPUT  = 0
    HIDDEN = 1
    OUTPUT = 2

class Connection:
    """
    A weighted connection between two slots of an agent's value layers.

    A slot is addressed by a (layer, index) pair. Connections only run in the
    feed-forward direction: they start at the input or hidden layer and end at
    the hidden or output layer. Nothing starts at the output layer and nothing
    ends at the input layer.

    Addressing by index means a connection is only valid relative to the current
    size of the layers it touches: 'start_idx' must be smaller than the size of
    'start_layer' and 'end_idx' smaller than the size of 'end_layer'. Whenever
    a hidden node is deleted the hidden layer is compacted, and the agent is
    responsible for repairing every connection that pointed into it.

    Public Attributes:
        start_layer: Layer the connection reads from (INPUT or HIDDEN)
        start_idx:   Slot within 'start_layer'
        end_layer:   Layer the connection accumulates into (HIDDEN or OUTPUT)
        end_idx:     Slot within 'end_layer'
        weight:      Multiplier applied to the activated source value

    Public Methods:
        copy(): Return an independent copy of this connection
    """

    def __init__(self,
                 start_layer: int,
                 start_idx  : int,
                 end_layer  : int,
                 end_idx    : int,
                 weight     : float):
        """
        Initialize a connection.

        Parameters:
            start_layer: Layer the connection reads from (0 or 1)
            start_idx:   Slot within 'start_layer'
            end_layer:   Layer the connection accumulates into (1 or 2)
            end_idx:     Slot within 'end_layer'
            weight:      Multiplier applied to the activated source value

        Raises:
            ValueError: If the layers violate the feed-forward direction
        """
        if start_layer not in (Layer.INPUT, Layer.HIDDEN):
            raise ValueError(f"Connections must start at the input or hidden layer, got layer {start_layer}")
        if end_layer not in (Layer.HIDDEN, Layer.OUTPUT):
            raise ValueError(f"Connections must end at the hidden or output layer, got layer {end_layer}")

        self.start_layer: Layer = Layer(start_layer)
        self.start_idx  : int   = int(start_idx)
        self.end_layer  : Layer = Layer(end_layer)
        self.end_idx    : int   = int(end_idx)
        self.weight     : float = float(weight)

    @property
    def sort_key(self) -> tuple[int, int]:
        """Key used to order connections before an accumulation pass."""
        return (self.start_layer, self.end_layer)

    def copy(self) -> 'Connection':
        return Connection(self.start_layer, self.start_idx, self.end_layer, self.end_idx, self.weight)

    def __eq__(self, other):
        if not isinstance(other, Connection):
            return NotImplemented
        return (self.start_layer, self.start_idx, self.end_layer, self.end_idx, self.weight) == \
               (other.start_layer, other.start_idx, other.end_layer, other.end_idx, other.weight)

    def __repr__(self):
        return (f"Connection(start_layer={self.start_layer.name}, start_idx={self.start_idx},"
                f"end_layer={self.end_layer.name}, end_idx={self.end_idx}, weight={self.weight:+.6f})")

    def __str__(self):
        return (f"[L{int(self.start_layer)}:{self.start_idx:02d}=>"
                f"L{int(self.end_layer)}:{self.end_idx:02d},{self.weight:+.02f}]")
