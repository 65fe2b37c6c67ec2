"""
Unit tests for the evaluator (single accumulation pass).

Tests cover input validation, buffer handling, accumulation order,
activation use and the hidden => hidden ordering quirk.
"""

import pytest
import numpy as np
from unittest.mock import patch

from topoagent.activations import identity_activation, relu_activation, tanh_activation
from topoagent.errors      import ShapeMismatchError
from topoagent.genotype    import Agent
from topoagent.phenotype   import calculate


# ============================================================================
# Test: Input Validation
# ============================================================================

class TestCalculateValidation:
    """Test input size checks."""

    @pytest.mark.parametrize("sample", [[], [1.0], [1.0, 2.0, 3.0]])
    def test_wrong_size_raises(self, build_agent, sample):
        agent = build_agent(inputs=2)
        with pytest.raises(ShapeMismatchError):
            calculate(agent, sample)

    def test_error_reports_sizes(self, build_agent):
        agent = build_agent(inputs=2)
        with pytest.raises(ShapeMismatchError) as info:
            calculate(agent, [1.0, 2.0, 3.0])

        assert info.value.expected == 2
        assert info.value.actual   == 3
        assert "Input size (3) doesn't match target input size (2)" in str(info.value)

    def test_shape_mismatch_is_value_error(self, build_agent):
        with pytest.raises(ValueError):
            calculate(build_agent(inputs=1), [])

    def test_failed_call_leaves_inputs_untouched(self, build_agent):
        agent = build_agent(inputs=2)
        calculate(agent, [1.0, 2.0])

        with pytest.raises(ShapeMismatchError):
            calculate(agent, [5.0])
        np.testing.assert_array_equal(agent.inputs, [1.0, 2.0])

    def test_zero_inputs(self, build_agent):
        agent = build_agent(inputs=0, outputs=2)
        np.testing.assert_array_equal(calculate(agent, []), [0.0, 0.0])


# ============================================================================
# Test: Outputs
# ============================================================================

class TestCalculateOutputs:
    """Test the values computed by an accumulation pass."""

    def test_single_connection_scenario(self, build_agent):
        """Input 3.0 through an input => output connection of weight 2.0."""
        agent = build_agent(inputs=1, outputs=1, connections=[(0, 0, 2, 0, 2.0)])
        np.testing.assert_array_equal(calculate(agent, [3.0]), [6.0])

    def test_output_length(self, build_agent):
        agent = build_agent(inputs=2, outputs=4, connections=[(0, 1, 2, 3, 1.0)])
        output = calculate(agent, [1.0, 1.0])

        assert output.shape == (4,)
        np.testing.assert_array_equal(output, [0.0, 0.0, 0.0, 1.0])

    def test_disconnected_agent_outputs_zeros(self):
        agent = Agent.create_agents(1, 3, 2, [tanh_activation, tanh_activation])[0]
        np.testing.assert_array_equal(calculate(agent, [1.0, -1.0, 0.5]), [0.0, 0.0])

    def test_connections_accumulate(self, build_agent):
        agent = build_agent(inputs=2, outputs=1, connections=[
            (0, 0, 2, 0,  2.0),
            (0, 1, 2, 0, -1.0),
            (0, 0, 2, 0,  0.5),
        ])
        np.testing.assert_allclose(calculate(agent, [1.0, 4.0]), [2.0 - 4.0 + 0.5])

    def test_input_to_hidden_to_output(self, build_agent):
        agent = build_agent(inputs=1, outputs=1, hidden=1, connections=[
            (1, 0, 2, 0, 3.0),
            (0, 0, 1, 0, 2.0),
        ])
        np.testing.assert_array_equal(calculate(agent, [1.5]), [9.0])

    def test_activation_selected_by_start_layer(self, build_agent):
        """Values read from the input layer go through tanh, from the hidden layer through relu."""
        agent = build_agent(inputs=1, outputs=2, hidden=1,
                            activations=(tanh_activation, relu_activation),
                            connections=[
                                (0, 0, 1, 0, -1.0),
                                (1, 0, 2, 0,  1.0),
                                (0, 0, 2, 1,  1.0),
                            ])
        output = calculate(agent, [0.5])

        # hidden = tanh(0.5) * -1 < 0, so relu blocks it
        np.testing.assert_allclose(output, [0.0, np.tanh(0.5)])

    def test_output_activation_never_applied(self, build_agent):
        agent = build_agent(inputs=1, outputs=1, connections=[(0, 0, 2, 0, -2.0)],
                            activations=(identity_activation, identity_activation, relu_activation))
        np.testing.assert_array_equal(calculate(agent, [1.0]), [-2.0])

    def test_accepts_numpy_input(self, build_agent):
        agent = build_agent(inputs=2, outputs=1, connections=[(0, 1, 2, 0, 1.0)])
        np.testing.assert_array_equal(calculate(agent, np.array([0.0, 7.0])), [7.0])

    def test_method_delegates(self, build_agent):
        agent = build_agent(inputs=1, outputs=1, connections=[(0, 0, 2, 0, 2.0)])
        np.testing.assert_array_equal(agent.calculate([3.0]), [6.0])


# ============================================================================
# Test: Buffers
# ============================================================================

class TestCalculateBuffers:
    """Test that buffers are reset and outputs are copies."""

    def test_repeated_calls_identical(self, build_agent):
        agent = build_agent(inputs=2, outputs=1, hidden=2, connections=[
            (0, 0, 1, 0, 1.0),
            (0, 1, 1, 1, 0.5),
            (1, 0, 1, 1, 2.0),
            (1, 1, 2, 0, 1.0),
            (1, 0, 2, 0, -1.0),
        ])
        first  = calculate(agent, [0.3, -0.7])
        second = calculate(agent, [0.3, -0.7])
        np.testing.assert_array_equal(first, second)

    def test_stale_hidden_values_discarded(self, build_agent):
        agent = build_agent(inputs=1, outputs=1, hidden=1, connections=[(1, 0, 2, 0, 1.0)])
        agent.hidden[0] = 42.0
        agent.outputs[0] = 13.0

        np.testing.assert_array_equal(calculate(agent, [1.0]), [0.0])

    def test_hidden_buffer_resized_to_hidden_count(self, build_agent):
        agent = build_agent(inputs=1, outputs=1, hidden=1)
        agent.hidden_count = 3  # e.g. changed since the last evaluation

        calculate(agent, [1.0])
        np.testing.assert_array_equal(agent.hidden, np.zeros(3))

    def test_returns_copy_of_outputs(self, build_agent):
        agent = build_agent(inputs=1, outputs=1, connections=[(0, 0, 2, 0, 1.0)])
        output = calculate(agent, [1.0])
        output[0] = 99.0

        assert agent.outputs[0] == 1.0

    def test_inputs_copied(self, build_agent):
        agent  = build_agent(inputs=2, outputs=1)
        sample = np.array([1.0, 2.0])
        calculate(agent, sample)
        sample[0] = 50.0

        np.testing.assert_array_equal(agent.inputs, [1.0, 2.0])

    def test_buffers_taken_from_agent_layers(self, build_agent):
        agent = build_agent(inputs=1, outputs=1, connections=[(0, 0, 2, 0, 1.0)])

        with patch.object(agent, 'layer_buffer', wraps=agent.layer_buffer) as layer_buffer:
            calculate(agent, [1.0])

        assert [c.args[0] for c in layer_buffer.call_args_list] == [0, 1, 2]

    def test_connections_sorted_in_place(self, build_agent):
        agent = build_agent(inputs=1, outputs=1, hidden=1, connections=[
            (1, 0, 2, 0, 1.0),
            (0, 0, 1, 0, 1.0),
        ])
        calculate(agent, [1.0])
        assert [conn.sort_key for conn in agent.connections] == [(0, 1), (1, 2)]


# ============================================================================
# Test: Hidden => Hidden Ordering
# ============================================================================

class TestCalculateHiddenOrdering:
    """
    A hidden => hidden connection reads the value accumulated so far in the
    current pass, so the order of such connections changes the result.
    """

    def test_self_loop_applied_once(self, build_agent):
        agent = build_agent(inputs=1, outputs=1, hidden=1, connections=[
            (1, 0, 1, 0, 1.0),
            (0, 0, 1, 0, 1.0),
            (1, 0, 2, 0, 1.0),
        ])
        # h0 = x, then h0 += h0, then out = h0
        np.testing.assert_array_equal(calculate(agent, [1.5]), [3.0])

    def test_order_of_hidden_edges_matters(self, build_agent):
        edges = [(1, 1, 1, 0, 1.0),   # h1 => h0
                 (1, 0, 1, 1, 1.0)]   # h0 => h1
        common = [(0, 0, 1, 0, 1.0),  # in => h0
                  (1, 0, 2, 0, 1.0),  # h0 => out
                  (1, 1, 2, 0, 1.0)]  # h1 => out

        agent_a = build_agent(inputs=1, outputs=1, hidden=2, connections=edges + common)
        agent_b = build_agent(inputs=1, outputs=1, hidden=2, connections=edges[::-1] + common)

        # a: h0 = 2, h0 += h1 (0), h1 += h0 (2)      => out = 2 + 2
        # b: h0 = 2, h1 += h0 (2), h0 += h1 (2 => 4) => out = 4 + 2
        np.testing.assert_array_equal(calculate(agent_a, [2.0]), [4.0])
        np.testing.assert_array_equal(calculate(agent_b, [2.0]), [6.0])

    def test_hidden_read_before_written(self, build_agent):
        """A hidden slot that nothing feeds contributes zero."""
        agent = build_agent(inputs=1, outputs=1, hidden=2, connections=[
            (1, 1, 2, 0, 1.0),
            (0, 0, 1, 0, 1.0),
        ])
        np.testing.assert_array_equal(calculate(agent, [5.0]), [0.0])
