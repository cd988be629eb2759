#!/usr/bin/env python3
"""Test runner for padelpro."""

import os
import sys

import coverage
import pytest


def run_tests():
    """Run all tests with coverage reporting."""
    cov = coverage.Coverage(
        branch=True,
        source=['padelpro'],
        omit=[
            '*/tests/*',
            '*/site-packages/*',
            '*/__pycache__/*'
        ]
    )
    cov.start()

    start_dir = os.path.dirname(os.path.abspath(__file__))
    exit_code = pytest.main(['-v', start_dir])

    cov.stop()
    cov.save()

    print('\nCoverage Summary:')
    cov.report()

    cov.html_report(directory='coverage_html')
    print('\nDetailed coverage report generated in coverage_html/index.html')

    return exit_code == 0

if __name__ == '__main__':
    success = run_tests()
    sys.exit(0 if success else 1)
