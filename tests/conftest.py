import pytest

@pytest.fixture(scope='function')
def seed():
	return 123456789
