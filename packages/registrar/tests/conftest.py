import logging

import pytest

from registrar import ContainerBuilder


@pytest.fixture(autouse=True)
def _debug_logging(caplog):
    caplog.set_level(logging.DEBUG, logger="registrar")


@pytest.fixture
def builder():
    return ContainerBuilder()
