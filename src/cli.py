"""Command-line front end for the salary tax calculator.

Usage:
    # Single assessment
    paye-calc --salary 36000 --type employed

    # Currency text is accepted; print JSON instead of the summary
    paye-calc --salary '$100,000.00' --type self-employed --json

    # Interactive session: keeps a history of assessments until you quit
    paye-calc

    # Use another rate table from config/
    paye-calc --rate-table my_table.yaml --salary 60000 --type employed
"""

import argparse
import json
import logging
import sys
from collections.abc import Callable
from typing import TextIO

import yaml

from config.settings import settings
from src.calculators.errors import InvalidInputError
from src.calculators.paye import compute_assessment
from src.calculators.tax_data import DEFAULT_RATE_TABLE, RateTable, load_rate_table
from src.forms import FormValidationError, parse_assessment_form
from src.formatting import DISCLAIMER, PRIVACY_NOTICE, render_assessment, render_history
from src.history import AssessmentHistory

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_INVALID_INPUT = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Estimate monthly PAYE and NIS for a Barbados salary"
    )
    parser.add_argument("--salary", help="Annual gross salary, e.g. 36000 or '$36,000.00'")
    parser.add_argument(
        "--type",
        dest="employment_type",
        help="Employment status: employed or self-employed",
    )
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument(
        "--rate-table",
        default=None,
        help="YAML rate table in config/ (default: built-in table)",
    )
    parser.add_argument("--privacy", action="store_true", help="Show the privacy notice")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    return parser.parse_args(argv)


def resolve_rate_table(filename: str | None = None) -> RateTable:
    """Rate table from the given file, the configured file, or the built-in one."""
    filename = filename or settings.rate_table_file
    if not filename:
        return DEFAULT_RATE_TABLE
    logger.info("Loading rate table from %s", filename)
    return load_rate_table(filename)


def _print_errors(errors: dict[str, str], out: TextIO | None) -> None:
    for field, message in errors.items():
        print(f"{field}: {message}", file=out)


def run_once(
    args: argparse.Namespace,
    table: RateTable,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Assess the salary given on the command line."""
    try:
        assessment_input = parse_assessment_form(args.salary, args.employment_type)
        result = compute_assessment(assessment_input, table)
    except FormValidationError as exc:
        _print_errors(exc.errors, err or sys.stderr)
        return EXIT_INVALID_INPUT
    except InvalidInputError as exc:
        _print_errors({exc.field: exc.message}, err or sys.stderr)
        return EXIT_INVALID_INPUT

    if args.json:
        print(json.dumps(result.to_dict(), indent=2), file=out)
    else:
        print(render_assessment(result, table, settings.currency_symbol), file=out)
        print(file=out)
        print(DISCLAIMER, file=out)
    return EXIT_OK


def run_interactive(
    table: RateTable,
    input_fn: Callable[[str], str] = input,
    out: TextIO | None = None,
) -> AssessmentHistory:
    """Prompt for assessments until a blank salary or EOF.

    Returns the session's history; it is discarded by the caller.
    """
    history = AssessmentHistory()
    print("Barbados Salary Tax Calculator", file=out)
    print(DISCLAIMER, file=out)

    while True:
        try:
            salary = input_fn("Annual gross salary (blank to quit): ")
            if not salary.strip():
                break
            employment_type = input_fn("Employment status [employed/self-employed]: ")
        except EOFError:
            break

        try:
            assessment_input = parse_assessment_form(salary, employment_type)
            result = compute_assessment(assessment_input, table)
        except FormValidationError as exc:
            _print_errors(exc.errors, out)
            continue
        except InvalidInputError as exc:
            _print_errors({exc.field: exc.message}, out)
            continue

        history.append(result)
        print(file=out)
        print(render_history(history, table, settings.currency_symbol), file=out)
        print(file=out)

    logger.info("Session ended after %d assessment(s)", len(history))
    return history


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    if args.privacy:
        print(PRIVACY_NOTICE)
        return EXIT_OK

    try:
        table = resolve_rate_table(args.rate_table)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        logger.error("Could not load rate table: %s", exc)
        return EXIT_CONFIG_ERROR

    if args.salary is None and args.employment_type is None:
        run_interactive(table)
        return EXIT_OK
    return run_once(args, table)


if __name__ == "__main__":
    sys.exit(main())
