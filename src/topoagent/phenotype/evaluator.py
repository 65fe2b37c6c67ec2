"""
Agent Evaluator Module

This module implements the forward evaluation of an agent: a single
accumulation pass over the agent's connections.

The pass is not a layered forward pass. Connections are sorted by
(start layer, end layer) and each one, in that order, adds its weighted,
activated source value into its destination slot. For input => * and
* => output edges this is equivalent to a layered evaluation; for
hidden => hidden edges it is not. Such an edge reads the source's value as
accumulated so far in the current pass, so the result depends on the relative
order of the hidden => hidden connections (kept stable by the sort).
Evolved agents depend on this order sensitivity, so it must not be replaced
with a topologically ordered evaluation.

Functions:
    calculate(agent, input_vector): Evaluate an agent on one input sample
"""

import numpy as np
from typing import Sequence, TYPE_CHECKING

from topoagent.errors import ShapeMismatchError

if TYPE_CHECKING:
    from topoagent.genotype.agent import Agent

def calculate(agent: 'Agent', input_vector: Sequence[float]) -> np.ndarray:
    """
    Evaluate 'agent' on one input sample.

    Steps:
     1. check the sample matches the input layer
     2. load the sample into the input buffer
     3. zero the output buffer, re-create the hidden buffer with 'hidden_count' zeros
     4. stably sort the connections by (start layer, end layer), in place
     5. for each connection: dest[end_idx] += activation[start_layer](source[start_idx]) * weight
     6. return a copy of the output buffer

    Since every buffer except the inputs is reset first, evaluating an unchanged
    agent twice on the same sample gives identical outputs.

    Parameters:
        agent:        The agent to evaluate
        input_vector: One value per input slot

    Returns:
        Output values, shape (output_count,)

    Raises:
        ShapeMismatchError: If len(input_vector) != agent.input_count
    """
    if len(input_vector) != agent.input_count:
        raise ShapeMismatchError(agent.input_count, len(input_vector))

    agent.inputs = np.array(input_vector, dtype=np.float64)
    agent.outputs.fill(0.0)
    agent.hidden = np.zeros(agent.hidden_count, dtype=np.float64)

    agent.sort_connections()

    buffers     = tuple(agent.layer_buffer(layer) for layer in range(3))
    activations = agent.activation_by_layer
    for conn in agent.connections:
        source = buffers[conn.start_layer][conn.start_idx]
        buffers[conn.end_layer][conn.end_idx] += activations[conn.start_layer](source) * conn.weight

    return agent.outputs.copy()
