"""
XOR Problem Implementation

This module implements the classic XOR (exclusive OR) problem as a benchmark
for training a feedforward network, either by backpropagation or by the
genetic algorithm ('trainer' in the configuration file).

The XOR Problem:
    XOR is a two-input, one-output boolean function where the output is True
    only when the inputs differ:
        Input (0, 0) -> Output 0
        Input (0, 1) -> Output 1
        Input (1, 0) -> Output 1
        Input (1, 1) -> Output 0

    This problem cannot be solved by a single-layer perceptron (linear classifier)
    and requires at least one hidden layer.

Error:
    The RMS error of the network over the four cases.
    The trial succeeds when the error drops to the configured threshold.

Classes:
    Trial_XOR:      Trial training a network to solve XOR
    Experiment_XOR: Multi-trial experiment for XOR with statistical analysis

Usage:
    Single Trial:
        config = Config("examples/configs/config_xor_backprop.ini")
        trial = Trial_XOR(config)
        trial.run()

    Experiment (Multiple Trials):
        config = Config("examples/configs/config_xor_genetic.ini")
        experiment = Experiment_XOR(num_trials=20, config=config)
        experiment.run(num_jobs_trials=-1)
"""

import numpy as np
from statistics import mean

from evoprop.run.config import Config
from evoprop.run        import Experiment, Trial

class Trial_XOR(Trial):
    """
    Trial training a feedforward network on the XOR boolean function.

    Problem Definition:
        Inputs: 2 binary values (0 or 1)
        Output: 1 binary value (XOR of inputs)
        Training cases: All 4 possible input combinations

    Implemented Methods:
        _get_training_data(): The four XOR cases
        _report_progress():   Display the error every 'report_every' iterations
        _final_report():      Display the XOR truth table of the trained network
    """

    def __init__(self, config: Config, suppress_output: bool = False, report_every: int = 100):
        """
        Initialize the XOR trial.

        Parameters:
            config:          Configuration parameters
            suppress_output: If True, suppress progress and final reports
                             (useful when running multiple trials in an experiment)
            report_every:    Number of iterations between two progress reports
        """
        super().__init__(config, suppress_output)
        self._report_every = report_every

        # shape: (4, 2) for inputs, (4, 1) for outputs
        self.xor_inputs  = np.array([[0.0, 0.0],
                                     [0.0, 1.0],
                                     [1.0, 0.0],
                                     [1.0, 1.0]])
        self.xor_outputs = np.array([[0.0],
                                     [1.0],
                                     [1.0],
                                     [0.0]])

    def _reset(self):
        """Reset trial state."""
        return super()._reset()

    def _get_training_data(self):
        return self.xor_inputs, self.xor_outputs

    def _report_progress(self):
        """
        Print the error of the current iteration.

        This method is suppressed by setting 'self._suppress_output' to 'True',
        which we might do when running many trials, as part of an experiment.
        """
        if self._iteration_counter % self._report_every:
            return
        print(f"Iteration #{self._iteration_counter:05d} Error: {self.error:.6f}")

    def _final_report(self):
        """
        Display the results of the trained network on the four XOR cases.

        This method is suppressed by setting 'self._suppress_output' to 'True',
        which we might do when running many trials, as part of an experiment.
        """
        network = self.network

        s  = f"===============\n"
        s += f"FINAL ({self._config.trainer})\n"
        s += f"iterations = {self._iteration_counter}\n"
        s += f"error      = {self.error:.6f}\n"
        s += "[SUCCESS]\n" if not self.failed else "[FAILED]\n"
        s += '\n'

        s += "input         output   target  error\n"
        s += "------------------------------------\n"
        for inputs, target in zip(self.xor_inputs, self.xor_outputs):
            output = network.compute_outputs(inputs)[0]
            error  = abs(output - target[0])
            s += f"{inputs.tolist()} -> {output:.4f}    {target[0]}   {error:.4f}\n"

        print(s)

class Experiment_XOR(Experiment):

    def __init__(self, num_trials: int, config: Config):
        """
        Initialize XOR experiment with multiple trials.

        Parameters:
            num_trials: Number of trials in this experiment
            config:     Configuration parameters
        """
        super().__init__(Trial_XOR, num_trials, config)

    def _reset(self):
        """
        Reset experiment state before starting a new run.
        """
        super()._reset()

    def _prepare_trial(self, trial: Trial_XOR, trial_number: int):
        """
        Configure the experiment in preparation for the next run.
        """
        # the default implementation prints a progress report.
        super()._prepare_trial(trial, trial_number)

    def _extract_trial_results(self, trial: Trial_XOR, trial_number: int) -> dict:
        """
        Extract relevant results at the end of a trial.
        """
        return super()._extract_trial_results(trial, trial_number)

    def _analyze_trial_results(self, results: dict):
        """
        Extract results of each trial, once complete.
        """
        # Call parent class method to populate statistics lists
        super()._analyze_trial_results(results)

        # print trial summary
        s  = f"Trial {results['trial_number']:03d}: "
        s += f"error={results['final_error']:.6f}, "
        s += f"iterations={results['number_iterations']:5} "
        s += "[SUCCESS]" if results['success'] else "[FAILED]"
        print(s)

    def _final_report(self):
        """
        Produce the final report, aggregating the data obtained from each trial.
        """
        s  = "\nSUMMARY:\n"
        s += f"Trainer               = {self._config.trainer}\n"
        s += f"Total trials          = {self._trial_counter}\n"
        s += f"Success rate          = {100*self.success_rate:.0f}%\n"

        # Only compute statistics if there were successful trials
        if self._number_iterations:
            s += f"Avg # iterations      = {mean(self._number_iterations):.0f}\n"
            s += f"Avg final error       = {mean(self._final_error):.6f}\n"
        else:
            s += "No successful trials - cannot compute statistics\n"
        print(s)
