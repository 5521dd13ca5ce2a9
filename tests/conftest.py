import pytest


@pytest.fixture
def anyio_backend():
    # The code relies on asyncio.timeout, so run anyio tests on asyncio only.
    return "asyncio"
