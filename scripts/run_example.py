#!/usr/bin/env python3
"""
Utility script to run the examples easily.

Usage:
    python scripts/run_example.py xor
    python scripts/run_example.py xor --trainer genetic
    python scripts/run_example.py xor --mode experiment --num-trials 20
"""

import sys
import argparse
import logging
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from evoprop import Config
from examples.trial_XOR import Trial_XOR, Experiment_XOR


EXAMPLES = {
    'xor': {
        'trial': Trial_XOR,
        'experiment': Experiment_XOR,
        'config': {
            'backpropagation': 'examples/configs/config_xor_backprop.ini',
            'genetic':         'examples/configs/config_xor_genetic.ini',
        },
        'description': 'XOR logic problem'
    }
}


def main():
    parser = argparse.ArgumentParser(description='Run examples')
    parser.add_argument('example', choices=EXAMPLES.keys(),
                        help='Example to run')
    parser.add_argument('--trainer', choices=['backpropagation', 'genetic'], default='backpropagation',
                        help='Training algorithm to use')
    parser.add_argument('--mode', choices=['trial', 'experiment'], default='trial',
                        help='Run single trial or full experiment')
    parser.add_argument('--num-trials', type=int, default=20,
                        help='Number of trials for experiment mode')
    parser.add_argument('--num-jobs', type=int, default=4,
                        help='Number of parallel jobs')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for reproducible runs')
    parser.add_argument('--verbose', action='store_true',
                        help='Log training details')

    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(asctime)s %(name)s %(levelname)s %(message)s')

    example = EXAMPLES[args.example]
    print(f"Running {example['description']}...")
    print(f"Mode: {args.mode}")
    print(f"Trainer: {args.trainer}")

    config = Config(example['config'][args.trainer])
    if args.seed is not None:
        config.seed = args.seed

    if args.mode == 'trial':
        trial = example['trial'](config)
        trial.run(num_jobs=args.num_jobs)
        print(f"\nFinal error: {trial.error:.6f}")
    else:
        experiment = example['experiment'](num_trials=args.num_trials, config=config)
        experiment.run(num_jobs_trials=args.num_jobs, num_jobs_mating=1)


if __name__ == '__main__':
    main()
