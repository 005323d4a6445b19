from .entropy import SystemEntropy, make_source
from .errors import DomainError, EntropyError
from .generator import GeneratorConfig, Random
from .source import LaggedFibonacciSource

__all__ = [
    "Random",
    "GeneratorConfig",
    "LaggedFibonacciSource",
    "make_source",
    "SystemEntropy",
    "DomainError",
    "EntropyError",
]
