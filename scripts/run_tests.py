import os
import logging
import importlib
import pkgutil
import sys
import argparse
from datetime import datetime
import unittest

# Add the parent directory to the sys path so that modules can be found
base_path = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.append(base_path)

import PyStrings.UnitTests
from PyStrings.Helpers.Tests import create_logfile, end_logfile, separator

logging.getLogger().setLevel(logging.DEBUG)

def load_unit_tests(test_name : str|None = None) -> unittest.TestSuite:
    """
    Load the test_* modules in PyStrings.UnitTests, or only the named module
    """
    loader = unittest.TestLoader()
    suite = unittest.TestSuite()

    for module_info in pkgutil.iter_modules(PyStrings.UnitTests.__path__):
        module_name = module_info.name
        if not module_name.startswith('test_'):
            continue

        if test_name and module_name != test_name:
            continue

        module = importlib.import_module(f"PyStrings.UnitTests.{module_name}")
        suite.addTests(loader.loadTestsFromModule(module))

    return suite

def run_unit_tests(results_path : str, test_name : str|None = None) -> bool:
    """
    Run the unit tests with a log file in the results directory
    """
    log_file = create_logfile(results_path, "unit_tests.log")

    logging.info(separator)
    logging.info("Running unit tests at " + datetime.now().strftime("%Y-%m-%d at %H:%M"))
    logging.info(separator)

    result = unittest.runner.TextTestRunner(verbosity=2).run(load_unit_tests(test_name))

    logging.info(separator)
    logging.info("Completed unit tests at " + datetime.now().strftime("%Y-%m-%d at %H:%M"))
    logging.info(separator)

    end_logfile(log_file)

    return result.wasSuccessful()

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run Python tests")
    parser.add_argument('test', nargs='?', help="Specify the name of a test module to run (e.g. test_Documents)", default=None)
    args = parser.parse_args()

    scripts_directory = os.path.dirname(os.path.abspath(__file__))
    root_directory = os.path.dirname(scripts_directory)
    results_directory =  os.path.join(root_directory, 'test_results')

    if not os.path.exists(results_directory):
        os.makedirs(results_directory)

    success = run_unit_tests(results_directory, test_name=args.test)

    sys.exit(0 if success else 1)
