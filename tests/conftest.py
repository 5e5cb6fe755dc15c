import io

import pytest

from primecount.logging import setup_logging
from primecount.services.reporter import Reporter


@pytest.fixture(scope="session", autouse=True)
def _logging():
    setup_logging("INFO")


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def reporter(out):
    return Reporter(out)
