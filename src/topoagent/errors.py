"""
Errors raised by the agent model and the evaluator.

Both subclass ValueError, so callers that already guard against invalid
structure with 'except ValueError' keep working.

Classes:
    ShapeMismatchError: Input vector length differs from the agent's input count
    ConstructionError:  Invalid counts or activation set supplied at creation
"""

class ShapeMismatchError(ValueError):
    """
    Raised by 'calculate' when the input vector does not match the input layer.
    """

    def __init__(self, expected: int, actual: int):
        self.expected: int = expected
        self.actual  : int = actual
        super().__init__(f"Input size ({actual}) doesn't match target input size ({expected})")

class ConstructionError(ValueError):
    """
    Raised when agents are created with negative sizes or an incomplete activation set.
    """
