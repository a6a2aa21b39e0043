"""BDD test file for snapshot windowing and retention features.

This file loads scenarios from feature files and generates test functions.
Step definitions are in conftest.py.
"""

from pytest_bdd import scenarios

scenarios("retention_window.feature")
