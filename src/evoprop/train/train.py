from abc    import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from evoprop.phenotype import Network

class Train(ABC):
    """
    Interface shared by all feedforward network training algorithms.

    Public Properties:
        error:   The error after the most recent iteration
        network: The best network found so far

    Public Methods:
        iteration(): Perform one iteration of training
    """

    @property
    @abstractmethod
    def error(self) -> float:
        pass

    @property
    @abstractmethod
    def network(self) -> 'Network':
        pass

    @abstractmethod
    def iteration(self):
        pass
