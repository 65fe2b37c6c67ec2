"""
Agent Phenotype Package

This package turns an agent's structure into behavior: given an input sample,
it computes the agent's outputs.

Modules:
    evaluator: the single accumulation pass over an agent's connections

Exported Functions:
    calculate: Evaluate an agent on one input sample
"""

from topoagent.phenotype.evaluator import calculate

__all__ = ['calculate']
