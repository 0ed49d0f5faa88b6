import argparse
import logging

import exp1
import exp2
from densematrix.logging_config import setup_logging


def main():
    parser = argparse.ArgumentParser(description="Run one of the densematrix experiments.")
    parser.add_argument(
        '--exp',
        type=int,
        required=True,
        choices=[1, 2],
        help="Experiment number (1: cross-validation against numpy, 2: elimination scaling).",
    )
    parser.add_argument('--verbose', action='store_true', help="Show DEBUG records from the library.")
    parser.add_argument('--log-file', default=None, help="Also write log records to this file.")
    args = parser.parse_args()

    setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)

    if args.exp == 1:
        exp1.run()
    elif args.exp == 2:
        exp2.run()

if __name__ == "__main__":
    main()
