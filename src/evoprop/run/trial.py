"""
Training Trial Module

This module defines the abstract base class for training trials.

A trial represents one independent training run: a network is built from the
configuration, a trainer (backpropagation or genetic algorithm) is attached to
it, and iterations are performed until the error is low enough or the maximum
number of iterations is reached.
"""

import logging
import numpy as np
from abc    import ABC, abstractmethod
from typing import Optional

from evoprop.phenotype  import Network
from evoprop.pool       import NeuralGeneticAlgorithm
from evoprop.run.config import Config
from evoprop.train      import Backpropagation, Train

logger = logging.getLogger(__name__)

class Trial(ABC):
    """
    Abstract base class for implementing a training trial.

    Subclasses must implement:
    - _reset(): Reset trial-specific state and call super()._reset()
    - _get_training_data(): Return the input and ideal patterns to train on
    - _report_progress(): Display progress after each iteration
    - _final_report(): Display final results

    Subclasses can override:
    - _build_network(): Custom network construction (default: from config)
    - _terminate(): Custom termination logic (default: max iterations + error threshold)

    Trainers ('trainer' in the configuration):
        'backpropagation' - batch gradient descent with momentum
        'genetic'         - genetic algorithm over the flattened weights

    Public Attributes:
        failed:        True unless the error threshold was reached
        error_history: Error after the initial state and after each iteration

    Public Methods:
        run(): Execute a complete training trial
    """

    def __init__(self, config: Config, suppress_output: bool = False):
        """
        Initialize the trial.

        Parameters:
            config:          Configuration parameters
            suppress_output: If True, suppress progress and final reports
                             (useful when running multiple trials in experiments)
        """
        self._config           : Config          = config
        self._iteration_counter: int             = 0
        self._trainer          : Optional[Train] = None
        self._suppress_output  : bool            = suppress_output
        self.failed            : bool            = True
        self.error_history     : list[float]     = []

    @property
    def trainer(self) -> Optional[Train]:
        return self._trainer

    @property
    def network(self) -> Optional[Network]:
        return self._trainer.network if self._trainer is not None else None

    @property
    def error(self) -> float:
        return self._trainer.error if self._trainer is not None else float('nan')

    @property
    def iterations(self) -> int:
        return self._iteration_counter

    def run(self, num_jobs: Optional[int] = None):
        """
        Run the trial.

        Resets the trial state, builds the network and the trainer,
        and iterates until the terminate condition is met.

        Parameters:
            num_jobs: Number of worker threads used by the genetic algorithm;
                      overrides 'num_jobs' from the configuration if given.
                      Ignored by backpropagation, which is single-threaded.
        """
        # Reset the trial state before starting a new run
        self._reset()

        inputs, ideals = self._get_training_data()
        network        = self._build_network()
        self._trainer  = self._build_trainer(network, inputs, ideals, num_jobs)

        # The genetic algorithm knows its error from the start; backpropagation
        # only after the first iteration
        if self._config.trainer == 'genetic':
            self.error_history.append(self._trainer.error)
            if not self._suppress_output:
                self._report_progress()

        # Training loop
        while not self._terminate():
            self._iteration_counter += 1
            self._trainer.iteration()
            self.error_history.append(self._trainer.error)

            # Display progress after each iteration
            if not self._suppress_output:
                self._report_progress()

        logger.info("Trial finished after %d iterations: error=%.6f, failed=%s",
                    self._iteration_counter, self._trainer.error, self.failed)

        # Produce final report
        if not self._suppress_output:
            self._final_report()

    @abstractmethod
    def _reset(self):
        """
        Reset the trial state before starting a new run.

        Subclasses should call super()._reset() and then
        initialize their problem-specific data.
        """
        self._iteration_counter = 0
        self._trainer           = None
        self.failed             = True
        self.error_history      = []

    @abstractmethod
    def _get_training_data(self) -> tuple[np.ndarray, np.ndarray]:
        """
        Return the training data as a pair (inputs, ideals).

        'inputs' holds one input pattern per row, with as many columns as
        the input layer has neurons; 'ideals' holds the matching ideal output
        patterns, with as many columns as the output layer has neurons.
        """
        pass

    def _build_network(self) -> Network:
        """
        Build the network to train from the configuration.
        """
        rng = np.random.default_rng(self._config.seed)
        return Network.from_sizes(self._config.layer_sizes,
                                  self._config.activation,
                                  self._config.output_activation,
                                  rng)

    def _build_trainer(self, network: Network, inputs, ideals, num_jobs: Optional[int] = None) -> Train:
        """
        Attach the trainer named in the configuration to the network.
        """
        config = self._config

        if config.trainer == 'backpropagation':
            return Backpropagation(network, inputs, ideals, config.learn_rate, config.momentum)

        if config.trainer == 'genetic':
            return NeuralGeneticAlgorithm(network, inputs, ideals,
                                          population_size   = config.population_size,
                                          mutation_percent  = config.mutation_percent,
                                          percent_to_mate   = config.percent_to_mate,
                                          reset             = config.reset_weights,
                                          mating_population = config.mating_population,
                                          cut_length        = config.cut_length,
                                          num_jobs          = num_jobs if num_jobs is not None else config.num_jobs,
                                          seed              = config.seed)

        raise RuntimeError(f"bad 'trainer' in configuration: {config.trainer}")

    @abstractmethod
    def _report_progress(self):
        """
        Report trial progress after each iteration.

        This method is suppressed by setting 'self._suppress_output' to 'True',
        which we might do when running many trials, as part of an experiment.
        """
        pass

    @abstractmethod
    def _final_report(self):
        """
        Produce final report at the end of the trial.

        This method is suppressed by setting 'self._suppress_output' to 'True',
        which we might do when running many trials, as part of an experiment.
        """
        pass

    def _terminate(self) -> bool:
        """
        Determine whether the trial should terminate.

        This default implementation stops the trial after a maximum number
        of iterations and (optionally) also stops it as soon as the error
        has dropped to a given threshold.

        Subclasses can override this method for custom termination logic.

        Returns:
            bool: True if the trial should stop, False otherwise
        """
        # Has this trial run for too long?
        terminate = self._iteration_counter >= self._config.max_iterations

        # NaN never reaches the threshold
        error   = self._trainer.error
        success = bool(error <= self._config.error_threshold)

        if self._config.error_termination_check:
            terminate = terminate or success

        if terminate:
            self.failed = not success

        return terminate
