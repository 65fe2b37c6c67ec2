import numpy as np

def identity_activation(z):
    return z

def clamped_activation(z):
    return np.maximum(-1.0, np.minimum(1.0, z))

def relu_activation(z):
    return np.maximum(0.0, z)

def sigmoid_activation(z):
    # Clamp the exponent to keep np.exp from overflowing on large inputs
    z_clamped = np.clip(z, -60.0, 60.0)
    return 1.0 / (1.0 + np.exp(-z_clamped))

def tanh_activation(z):
    return np.tanh(z)

activations = {
    "identity": identity_activation,
    "clamped" : clamped_activation,
    "relu"    : relu_activation,
    "sigmoid" : sigmoid_activation,
    "tanh"    : tanh_activation
    }

activation_codes = {
    "identity": "IDN",
    "clamped" : "CLP",
    "relu"    : "RLU",
    "sigmoid" : "SIG",
    "tanh"    : "TNH"
    }

def activation_name(function) -> str | None:
    """
    Reverse lookup: the registry name of an activation function (None if unregistered).
    """
    for name, registered in activations.items():
        if registered is function:
            return name
    return None
