"""
Activations Package

This package provides the activation functions used by agents. Each agent holds
one activation function per layer, and the function objects are shared by
reference by every agent descending from the same lineage.

Exported:
    activations:      Dictionary mapping activation function names to functions
    activation_codes: Dictionary mapping activation function names to 3-letter codes
    activation_name:  Reverse lookup from function object to registry name
    Individual activation functions: identity_activation, clamped_activation,
                                     relu_activation, sigmoid_activation, tanh_activation
"""

from topoagent.activations.basic_activations import (
    activations,
    activation_codes,
    activation_name,
    identity_activation,
    clamped_activation,
    relu_activation,
    sigmoid_activation,
    tanh_activation
)

__all__ = [
    'activations',
    'activation_codes',
    'activation_name',
    'identity_activation',
    'clamped_activation',
    'relu_activation',
    'sigmoid_activation',
    'tanh_activation'
]
