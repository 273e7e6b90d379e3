"""
Общие фикстуры: настоящий движок SEAL (через TenSEAL) и детерминированный
движок в памяти для проверки логики получателя.
"""
import pytest

from client_logic import setup_keys
from he_engine import SealEngine

from helpers import TEST_SECURITY_CONFIG, FakeEngine


@pytest.fixture
def fake_engine():
    return FakeEngine()


@pytest.fixture
def fake_params(fake_engine):
    return fake_engine.derive_parameters()


@pytest.fixture
def fake_receiver(fake_engine, fake_params):
    return setup_keys(fake_params, fake_engine)


@pytest.fixture(scope='session')
def engine():
    return SealEngine()


@pytest.fixture(scope='session')
def params(engine):
    return engine.derive_parameters(TEST_SECURITY_CONFIG)


@pytest.fixture(scope='session')
def keys(engine, params):
    """Ключи на всю сессию тестов: генерация для 8192 заметно медленная"""
    return setup_keys(params, engine)

