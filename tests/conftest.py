import pytest

from fsk.conf import FskConf


BASE = '/home/me/.fsk/db'


@pytest.fixture
def store(fs):
    return FskConf(base_dir=BASE).instantiate()
