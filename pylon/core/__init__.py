from .errors import PylonError, PylonPluginError
from .runtime_args import RuntimeArgs
from .runtime_env import Environment, Network, RunSuper
from .tasks.registry import TaskRegistry

__all__ = [
  "PylonError",
  "PylonPluginError",
  "RuntimeArgs",
  "Environment",
  "Network",
  "RunSuper",
  "TaskRegistry",
]
