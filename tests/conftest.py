import logging

import pytest

from calcsolver_pkg.capabilities import Capabilities
from calcsolver_pkg.dispatch import Solver
from calcsolver_pkg.logging_config import ROOT_LOGGER_NAME
from calcsolver_pkg.parser import parse_expression


@pytest.fixture(autouse=True)
def reset_package_logger():
    """CLI tests call setup_logging; drop its handlers so later tests start clean."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def solver():
    return Solver()


@pytest.fixture
def raw_solver():
    """Solver that parses but never simplifies, so rule output is visible as is."""
    return Solver(Capabilities(parse=parse_expression))
