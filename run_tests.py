#!/usr/bin/env python3

import os
import sys
import unittest

TEST_FILE_PATTERN = '*_unittest.py'


def _iter_test_cases(suite):
    for test in suite:
        if isinstance(test, unittest.TestSuite):
            yield from _iter_test_cases(test)
        else:
            yield test


def run_tests(name_filter=None, verbosity=2):
    """Runs every line_grep test module, or only the tests whose id contains name_filter."""
    root_dir = os.path.dirname(os.path.abspath(__file__))
    package_dir = os.path.join(root_dir, 'line_grep')

    discovered = unittest.TestLoader().discover(package_dir, pattern=TEST_FILE_PATTERN, top_level_dir=root_dir)
    if name_filter:
        suite = unittest.TestSuite(
            test for test in _iter_test_cases(discovered) if name_filter.lower() in test.id().lower()
        )
    else:
        suite = discovered

    result = unittest.TextTestRunner(verbosity=verbosity).run(suite)
    return 0 if result.wasSuccessful() else 1


if __name__ == '__main__':
    sys.exit(run_tests(sys.argv[1] if len(sys.argv) > 1 else None))
