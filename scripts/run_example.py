#!/usr/bin/env python3
"""
Utility script to run the topoagent examples easily.

Usage:
    python scripts/run_example.py maximize
    python scripts/run_example.py xor --num-jobs 4 --seed 7
"""

import sys
import argparse
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from topoagent import Config
from examples.trial_maximize import Trial_Maximize
from examples.trial_XOR import Trial_XOR


EXAMPLES = {
    'maximize': {
        'trial': Trial_Maximize,
        'config': 'examples/config_maximize.ini',
        'description': 'Output maximization with a hidden-node penalty'
    },
    'xor': {
        'trial': Trial_XOR,
        'config': 'examples/config_xor.ini',
        'description': 'XOR logic problem'
    }
}


def main():
    parser = argparse.ArgumentParser(description='Run topoagent examples')
    parser.add_argument('example', choices=EXAMPLES.keys(),
                        help='Example to run')
    parser.add_argument('--num-jobs', type=int, default=1,
                        help='Number of parallel jobs for fitness evaluation')
    parser.add_argument('--seed', type=int, default=None,
                        help='Override the seed from the configuration file')
    parser.add_argument('--generations', type=int, default=None,
                        help='Override the maximum number of generations')

    args = parser.parse_args()

    example = EXAMPLES[args.example]
    print(f"Running {example['description']}...")

    root   = Path(__file__).parent.parent
    config = Config(str(root / example['config']))
    if args.seed is not None:
        config.seed = args.seed
    if args.generations is not None:
        config.max_number_generations = args.generations

    trial = example['trial'](config)
    trial.run(num_jobs=args.num_jobs)

    _, fitness = trial._population.get_fittest_agent()
    print(f"\nBest fitness: {fitness:.4f}")
    if config.fitness_termination_check:
        print("Solved" if not trial.failed else "Not solved")


if __name__ == '__main__':
    main()
