"""
Unit tests for Experiment abstract base class.
"""

import numpy as np
import pytest
from unittest.mock import Mock, patch

from evoprop.run.config     import Config
from evoprop.run.experiment import Experiment
from evoprop.run.trial      import Trial


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def config():
    """A small, fast backpropagation configuration."""
    config = Config()
    config.layer_sizes = [2, 3, 1]
    config.seed = 5
    config.max_iterations = 3
    config.error_termination_check = False
    return config


# ============================================================================
# Concrete Implementation for Testing
# ============================================================================

class ConcreteTrial(Trial):
    """Concrete implementation of Trial for testing purposes."""

    def __init__(self, config, suppress_output=False, threshold=None):
        super().__init__(config, suppress_output)
        self.threshold = threshold

    def _reset(self):
        super()._reset()

    def _get_training_data(self):
        inputs = np.array([[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]])
        ideals = np.array([[0.0], [1.0], [1.0], [0.0]])
        return inputs, ideals

    def _report_progress(self):
        pass

    def _final_report(self):
        pass


class ConcreteExperiment(Experiment):
    """Concrete implementation of Experiment for testing purposes."""

    def __init__(self, trial_class, num_trials, config, *args, **kwargs):
        super().__init__(trial_class, num_trials, config, *args, **kwargs)
        self.reset_called = False
        self.prepare_trial_calls = []
        self.analyze_trial_results_calls = []
        self.final_report_called = False

    def _reset(self):
        super()._reset()
        self.reset_called = True

    def _prepare_trial(self, trial, trial_number):
        self.prepare_trial_calls.append(trial_number)
        super()._prepare_trial(trial, trial_number)

    def _extract_trial_results(self, trial, trial_number):
        results = super()._extract_trial_results(trial, trial_number)
        results["threshold"] = trial.threshold
        return results

    def _analyze_trial_results(self, results):
        self.analyze_trial_results_calls.append(results)
        super()._analyze_trial_results(results)

    def _final_report(self):
        self.final_report_called = True


# ============================================================================
# Tests
# ============================================================================

class TestExperimentInit:

    def test_cannot_instantiate_abstract_experiment(self, config):
        with pytest.raises(TypeError):
            Experiment(ConcreteTrial, 3, config)

    def test_initial_counters(self, config):
        experiment = ConcreteExperiment(ConcreteTrial, 3, config)
        assert experiment._trial_counter == 0
        assert experiment._success_counter == 0
        assert experiment.success_rate == 0.0


class TestExperimentRun:

    def test_runs_every_trial(self, config):
        experiment = ConcreteExperiment(ConcreteTrial, 3, config)
        experiment.run()

        assert experiment.reset_called
        assert experiment.prepare_trial_calls == [1, 2, 3]
        assert [r["trial_number"] for r in experiment.analyze_trial_results_calls] == [1, 2, 3]
        assert experiment.final_report_called
        assert experiment._trial_counter == 3

    def test_results_content(self, config):
        experiment = ConcreteExperiment(ConcreteTrial, 1, config)
        experiment.run()

        results = experiment.analyze_trial_results_calls[0]
        assert results["number_iterations"] == 3
        assert np.isfinite(results["final_error"])
        assert results["success"] is False

    def test_trial_kwargs_forwarded(self, config):
        experiment = ConcreteExperiment(ConcreteTrial, 2, config, threshold=0.5)
        experiment.run()
        assert all(r["threshold"] == 0.5 for r in experiment.analyze_trial_results_calls)

    def test_successes_counted(self, config):
        config.error_threshold = 10.0
        experiment = ConcreteExperiment(ConcreteTrial, 4, config)
        experiment.run()

        assert experiment._success_counter == 4
        assert experiment.success_rate == 1.0
        assert experiment._number_iterations == [3, 3, 3, 3]
        assert len(experiment._final_error) == 4

    def test_failures_not_in_statistics(self, config):
        experiment = ConcreteExperiment(ConcreteTrial, 2, config)
        experiment.run()
        assert experiment._success_counter == 0
        assert experiment._number_iterations == []

    def test_rerun_resets_state(self, config):
        config.error_threshold = 10.0
        experiment = ConcreteExperiment(ConcreteTrial, 2, config)
        experiment.run()
        experiment.run()
        assert experiment._success_counter == 2

    def test_parallel_branch_gathers_all_results(self, config):
        """The parallel branch hands every trial to joblib and analyzes the results in order."""
        serial = ConcreteExperiment(ConcreteTrial, 2, config)
        serial.run(num_jobs_trials=1)

        def inline_parallel(n_jobs):
            assert n_jobs == 2
            return lambda tasks: [function(*args, **kwargs) for function, args, kwargs in tasks]

        parallel = ConcreteExperiment(ConcreteTrial, 2, config)
        with patch('evoprop.run.experiment.Parallel', side_effect=inline_parallel):
            parallel.run(num_jobs_trials=2)

        assert parallel._trial_counter == 2
        assert [r["final_error"] for r in parallel.analyze_trial_results_calls] == \
               [r["final_error"] for r in serial.analyze_trial_results_calls]

    def test_uses_trial_class(self, config):
        trial_class = Mock(spec=ConcreteTrial)
        trial_class.return_value = Mock(iterations=1, error=0.5, failed=True, threshold=None)
        experiment = ConcreteExperiment(trial_class, 2, config)
        experiment.run()

        assert trial_class.call_count == 2
        trial_class.assert_called_with(config=config, suppress_output=True)
