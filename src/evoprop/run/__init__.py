"""
Run Package

This package provides configuration, trial execution, and the experiment framework.

Exported:
    Config:     Parameters read from an INI file
    Trial:      One training run, until the error threshold or the iteration limit
    Experiment: Many independent trials, with aggregated statistics
"""

from evoprop.run.config     import Config
from evoprop.run.trial      import Trial
from evoprop.run.experiment import Experiment

__all__ = [
    'Config',
    'Trial',
    'Experiment'
]
