"""Run the test suite."""

import sys

import pytest


def run_tests(verbose=True):
    """Run all tests under tests/ and return pytest's exit code."""
    args = ["tests"]
    if verbose:
        args.append("-v")
    return pytest.main(args)


if __name__ == '__main__':
    verbose = '--verbose' in sys.argv or '-v' in sys.argv
    sys.exit(run_tests(verbose=verbose))
