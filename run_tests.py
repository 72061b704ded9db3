#!/usr/bin/env python3

import argparse
import os
import sys
import unittest

PACKAGE_DIR = "context_grep"

def _extract_test_cases(test):
    for t in test:
        if isinstance(t, unittest.TestSuite):
            yield from _extract_test_cases(t)
        else:
            yield t

def _select(suite, names):
    """Keeps the test cases whose id contains any of the given names."""
    names = [name.lower() for name in names]
    selected = unittest.TestSuite()
    for test_case in _extract_test_cases(suite):
        test_id = test_case.id().lower()
        if any(name in test_id for name in names):
            selected.addTest(test_case)
    return selected

def run_tests(names=None, verbosity=2):
    root_dir = os.path.dirname(os.path.abspath(__file__))
    loader = unittest.TestLoader()
    suite = loader.discover(os.path.join(root_dir, PACKAGE_DIR), pattern='*_unittest.py', top_level_dir=root_dir)
    if names:
        suite = _select(suite, names)
        if suite.countTestCases() == 0:
            print(f"No tests match: {', '.join(names)}", file=sys.stderr)
            return 1

    result = unittest.TextTestRunner(verbosity=verbosity).run(suite)
    return 0 if result.wasSuccessful() else 1

def main():
    parser = argparse.ArgumentParser(description="Run the context_grep unit tests.")
    parser.add_argument("names", nargs="*", help="Only run tests whose id contains one of these (case-insensitive), e.g. 'matcher' or 'TestRender'.")
    parser.add_argument("-q", "--quiet", action="store_true", help="Print one character per test instead of one line.")
    args = parser.parse_args()
    sys.exit(run_tests(args.names, verbosity=1 if args.quiet else 2))

if __name__ == '__main__':
    main()
