"""
Integration tests: the XOR example trial and experiment, driven by INI files.
"""

import os
import pytest
from pathlib import Path

from evoprop.run.config import Config
from examples.trial_XOR import Trial_XOR, Experiment_XOR

CONFIG_DIR = Path(__file__).parent.parent.parent / 'examples' / 'configs'


@pytest.fixture
def backprop_config():
    config = Config(os.path.join(CONFIG_DIR, 'config_xor_backprop.ini'))
    config.seed = 2
    config.max_iterations = 200
    return config


@pytest.fixture
def genetic_config():
    config = Config(os.path.join(CONFIG_DIR, 'config_xor_genetic.ini'))
    config.seed = 2
    config.population_size = 100
    config.num_jobs = 1
    config.max_iterations = 10
    return config


class TestXORTrial:

    def test_backpropagation_trial(self, backprop_config, capsys):
        trial = Trial_XOR(backprop_config)
        trial.run()

        assert 0 < trial.iterations <= 200
        assert trial.error == trial.error_history[-1]
        assert "FINAL (backpropagation)" in capsys.readouterr().out

    def test_genetic_trial(self, genetic_config, capsys):
        trial = Trial_XOR(genetic_config)
        trial.run()

        assert trial.iterations <= 10
        assert trial.error_history == sorted(trial.error_history, reverse=True)
        assert "FINAL (genetic)" in capsys.readouterr().out

    def test_suppressed_trial_prints_nothing(self, backprop_config, capsys):
        Trial_XOR(backprop_config, suppress_output=True).run()
        assert capsys.readouterr().out == ""


class TestXORExperiment:

    def test_experiment_summary(self, backprop_config, capsys):
        backprop_config.error_threshold = 1.0
        experiment = Experiment_XOR(num_trials=2, config=backprop_config)
        experiment.run()

        out = capsys.readouterr().out
        assert "Success rate          = 100%" in out
        assert experiment.success_rate == 1.0
