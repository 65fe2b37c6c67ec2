from topoagent.run.config import Config
from topoagent.run.trial  import Trial

__all__ = ['Config', 'Trial']
