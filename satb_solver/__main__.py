import argparse
import logging

from satb_solver.config.read_config import load_config_from_yaml
from satb_solver.four_part_solver import FourPartSolver, FourPartSolverSettings
from satb_solver.pitch_utils.music21_handler import write_solution
from satb_solver.utils.logs import configure_logging

LOGGER = logging.getLogger(__name__)


def get_parser():
    parser = argparse.ArgumentParser(
        prog="satb_solver",
        description="Find the smoothest four-part voicing of a roman text progression",
    )
    parser.add_argument("input_file", help="path to roman text input")
    parser.add_argument(
        "-o", "--output-file", help="path to midi (.mid) or musicxml (.xml) output"
    )
    parser.add_argument("-c", "--config", help="path to yaml settings")
    parser.add_argument("-l", "--log-file", help="path to log file")
    parser.add_argument(
        "-L",
        "--log-level",
        choices=("debug", "info", "warn"),
        default="warn",
        help="log level",
    )
    parser.add_argument(
        "--append-to-log",
        action="store_true",
        help="append to log file (if it exists)",
    )
    return parser


def main(args=None):
    args = get_parser().parse_args(args)
    configure_logging(args.log_file, args.log_level, args.append_to_log)
    settings = load_config_from_yaml(FourPartSolverSettings, args.config)
    solver = FourPartSolver(settings)
    print(f"Solving {args.input_file}")
    key, solution = solver.solve_rntxt(args.input_file)
    print(f"Key: {key}")
    print(solution)
    print(f"Cost: {solver.last_cost}")
    if args.output_file is None:
        LOGGER.info("No output file provided, skipping output")
    else:
        print(f"Writing {args.output_file}")
        write_solution(solution, args.output_file, key)
    return solution


if __name__ == "__main__":
    main()
