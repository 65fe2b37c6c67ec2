from topoagent.pool.population import Population

__all__ = ['Population']
