"""
Agent Genotype Package

This package implements the structural representation of an agent and the
reproduction operator that mutates it.

An agent's structure consists of:
- Three value layers: input (fixed size), hidden (grows and shrinks), output (fixed size)
- Connections: weighted edges addressing their endpoints by (layer, index)

Modules:
    connection:   Layer enumeration and Connection class
    agent:        Agent class
    reproduction: reproduce() and the individual mutations

Exported Classes:
    Layer:      Enumeration for layers (INPUT, HIDDEN, OUTPUT)
    Connection: Weighted feed-forward edge between two layer slots
    Agent:      Network with mutable topology

Exported Functions:
    reproduce: Create a mutated child of an agent
"""

from topoagent.genotype.connection   import Connection, Layer
from topoagent.genotype.reproduction import reproduce
from topoagent.genotype.agent        import Agent

__all__ = ['Agent',
           'Connection',
           'Layer',
           'reproduce']
