"""
Agent Reproduction Module

This module implements reproduction: the mutation operator which derives a
structurally valid child agent from a parent agent.

Randomness is not global: every draw comes from the numpy Generator passed in
by the caller. Given the same sequence of draws, 'reproduce' produces exactly
the same child, and independent generators (e.g. spawned from one SeedSequence)
can drive reproduction of different agents concurrently.

Functions:
    reproduce(parent, rates, max_weight, rng): Create a mutated child of 'parent'
"""

import numpy as np
from typing import TYPE_CHECKING

from topoagent.genotype.connection import Connection, Layer

if TYPE_CHECKING:
    from topoagent.genotype.agent import Agent
    from topoagent.run.config     import Config

def reproduce(parent    : 'Agent',
              rates     : 'Config',
              max_weight: float | None = None,
              rng       : np.random.Generator | None = None) -> 'Agent':
    """
    Create a child agent by cloning 'parent' and mutating the clone.

    The possible mutations are, in the order they are attempted:
      + delete a hidden node (repairing every connection that referenced it)
      + add a hidden node
      + delete a connection
      + add a connection
      + rewire a connection (new endpoints)
      + reweight a connection (new weight)
    Each mutation is gated by its own draw 'rng.random() < chance'. All six gates
    are drawn, in this order, on every call, and any combination may fire. A gated
    mutation which cannot apply (e.g. deleting a node from an agent without hidden
    nodes) is skipped; no mutation ever raises.

    Deleting a node compacts the hidden layer, which invalidates hidden indices.
    The repair happens before the later mutations draw any index, so those always
    see the compacted index space.

    Parameters:
        parent:     The agent to derive the child from (left unchanged)
        rates:      Provides 'new_node_chance', 'new_connection_chance',
                    'delete_node_chance', 'delete_connection_chance',
                    'change_weight_chance', 'change_connection_chance'
                    and, unless 'max_weight' is given, 'max_weight'
        max_weight: New weights are drawn uniformly from [-max_weight, max_weight)
        rng:        Source of random draws (a fresh default generator if None)

    Returns:
        The new child agent
    """
    if max_weight is None:
        max_weight = rates.max_weight
    if rng is None:
        rng = np.random.default_rng()

    child = parent.clone()

    if rng.random() < rates.delete_node_chance and child.hidden_count > 0:
        _mutate_delete_node(child, rng)

    if rng.random() < rates.new_node_chance:
        _mutate_add_node(child)

    if rng.random() < rates.delete_connection_chance and child.connection_count > 0:
        _mutate_delete_connection(child, rng)

    if rng.random() < rates.new_connection_chance:
        _mutate_add_connection(child, max_weight, rng)

    if rng.random() < rates.change_connection_chance and child.connection_count > 0:
        _mutate_change_connection(child, rng)

    if rng.random() < rates.change_weight_chance and child.connection_count > 0:
        _mutate_change_weight(child, max_weight, rng)

    return child

def _draw_index(agent: 'Agent', layer: int, rng: np.random.Generator) -> int | None:
    """
    Draw a slot uniformly from 'layer', or return None if the layer is empty.
    """
    size = agent.layer_size(layer)
    if size == 0:
        return None
    return int(rng.integers(0, size))

def _draw_layers(agent: 'Agent', rng: np.random.Generator) -> tuple[Layer, Layer]:
    """
    Draw the start and end layers of a connection.

    Without hidden nodes the only possible direction is input => output.
    """
    if agent.hidden_count == 0:
        return Layer.INPUT, Layer.OUTPUT
    start_layer = Layer(int(rng.integers(0, 2)))
    end_layer   = Layer(int(rng.integers(1, 3)))
    return start_layer, end_layer

def _mutate_delete_node(agent: 'Agent', rng: np.random.Generator) -> None:
    """
    Delete a random hidden node and repair the connections referencing the hidden layer.

    For every connection (start side first, then end side):
      + a reference to the deleted node is moved to a random hidden node; if no
        hidden node remains, a start moves to a random input slot and an end to
        a random output slot
      + a reference to a hidden node above the deleted one is decremented, to
        follow the compaction of the hidden layer
    A connection whose fallback layer is empty cannot be repaired and is removed.
    """
    idx = int(rng.integers(0, agent.hidden_count))
    agent.hidden_count -= 1

    repaired = []
    for conn in agent.connections:
        if conn.start_layer == Layer.HIDDEN and conn.start_idx >= idx:
            if conn.start_idx == idx:
                if agent.hidden_count > 0:
                    conn.start_idx = _draw_index(agent, Layer.HIDDEN, rng)
                else:
                    start_idx = _draw_index(agent, Layer.INPUT, rng)
                    if start_idx is None:
                        continue
                    conn.start_layer = Layer.INPUT
                    conn.start_idx   = start_idx
            else:
                conn.start_idx -= 1

        if conn.end_layer == Layer.HIDDEN and conn.end_idx >= idx:
            if conn.end_idx == idx:
                if agent.hidden_count > 0:
                    conn.end_idx = _draw_index(agent, Layer.HIDDEN, rng)
                else:
                    end_idx = _draw_index(agent, Layer.OUTPUT, rng)
                    if end_idx is None:
                        continue
                    conn.end_layer = Layer.OUTPUT
                    conn.end_idx   = end_idx
            else:
                conn.end_idx -= 1

        repaired.append(conn)

    agent.connections      = repaired
    agent.connection_count = len(repaired)
    agent.hidden           = np.delete(agent.hidden, idx)

def _mutate_add_node(agent: 'Agent') -> None:
    """
    Append an unconnected hidden node.
    """
    agent.hidden_count += 1
    agent.hidden = np.append(agent.hidden, 0.0)

def _mutate_delete_connection(agent: 'Agent', rng: np.random.Generator) -> None:
    """
    Remove a random connection.
    """
    idx = int(rng.integers(0, agent.connection_count))
    del agent.connections[idx]
    agent.connection_count -= 1

def _mutate_add_connection(agent: 'Agent', max_weight: float, rng: np.random.Generator) -> None:
    """
    Add a connection between random slots, with a random weight.

    Draw order: start layer, start slot, end layer, end slot, weight
    (layers are not drawn when the agent has no hidden nodes).
    The mutation is abandoned if a drawn layer has no slot to connect.
    """
    if agent.hidden_count == 0:
        start_layer = Layer.INPUT
        start_idx   = _draw_index(agent, start_layer, rng)
        end_layer   = Layer.OUTPUT
        end_idx     = _draw_index(agent, end_layer, rng)
    else:
        start_layer = Layer(int(rng.integers(0, 2)))
        start_idx   = _draw_index(agent, start_layer, rng)
        end_layer   = Layer(int(rng.integers(1, 3)))
        end_idx     = _draw_index(agent, end_layer, rng)

    if start_idx is None or end_idx is None:
        return

    weight = rng.uniform(-max_weight, max_weight)
    agent.connections.append(Connection(start_layer, start_idx, end_layer, end_idx, weight))
    agent.connection_count += 1

def _mutate_change_connection(agent: 'Agent', rng: np.random.Generator) -> None:
    """
    Move both endpoints of a random connection.

    New layers are drawn first, then new slots within them. The connection
    is left unchanged if a drawn layer has no slot to connect.
    """
    conn = agent.connections[int(rng.integers(0, agent.connection_count))]

    start_layer, end_layer = _draw_layers(agent, rng)
    start_idx = _draw_index(agent, start_layer, rng)
    end_idx   = _draw_index(agent, end_layer, rng)
    if start_idx is None or end_idx is None:
        return

    conn.start_layer = start_layer
    conn.start_idx   = start_idx
    conn.end_layer   = end_layer
    conn.end_idx     = end_idx

def _mutate_change_weight(agent: 'Agent', max_weight: float, rng: np.random.Generator) -> None:
    """
    Replace the weight of a random connection.
    """
    conn = agent.connections[int(rng.integers(0, agent.connection_count))]
    conn.weight = float(rng.uniform(-max_weight, max_weight))
