import pytest


@pytest.fixture
def anyio_backend():
    # Subprocess and signal handling are exercised on asyncio only.
    return "asyncio"
