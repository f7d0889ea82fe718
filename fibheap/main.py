"""Command-line driver comparing cascading-cut thresholds.

Runs the same seeded workload once per threshold and prints the resulting
heap counters, one line per threshold.
"""

import logging
from argparse import ArgumentParser
from dataclasses import replace
from typing import List, Optional

from fibheap import constants
from fibheap.workload import WorkloadConfig, run_workload


def make_parser() -> ArgumentParser:
    """Create the command-line argument parser.

    Returns:
        An ArgumentParser configured with the workload options.
    """
    parser = ArgumentParser(prog="fibheap")
    parser.add_argument("--log-level", default="WARNING")
    parser.add_argument(
        "--thresholds",
        type=int,
        nargs="+",
        default=[constants.DEFAULT_CUT_THRESHOLD],
    )
    parser.add_argument("--ops", type=int, default=constants.DEFAULT_WORKLOAD_OPS)
    parser.add_argument("--seed", type=int, default=constants.DEFAULT_WORKLOAD_SEED)
    parser.add_argument("--max-key", type=int, default=constants.DEFAULT_MAX_KEY)
    return parser


def configure_logging(log_level: str) -> None:
    """Configure the logging system with the specified log level.

    Args:
        log_level: The logging level (e.g., 'DEBUG', 'INFO', 'WARNING').
    """
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(filename)s:%(lineno)d -- %(message)s",
        level=log_level,
    )


def main(argv: Optional[List[str]] = None) -> None:
    parser = make_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    base = WorkloadConfig(ops=args.ops, seed=args.seed, max_key=args.max_key)
    for threshold in args.thresholds:
        stats = run_workload(replace(base, cut_threshold=threshold))
        print(
            f"c={stats.cut_threshold} size={stats.size} trees={stats.trees} "
            f"links={stats.total_links} cuts={stats.total_cuts}"
        )
    logging.info("done")


if __name__ == "__main__":
    main()
