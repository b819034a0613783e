from .blame import BlameStrategyPort
from .consumer import BlameConsumerPort
from .runner import CommandRunnerPort

__all__ = ["BlameConsumerPort", "BlameStrategyPort", "CommandRunnerPort"]
