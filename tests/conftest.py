import pytest

from precrypt.pre import PreClient


# Pairings and GT exponentiations are slow in pure Python; share one engine
# and two key pairs across the whole run.

@pytest.fixture(scope="session")
def client() -> PreClient:
    return PreClient()

@pytest.fixture(scope="session")
def alice(client):
    return client.generate_random_key_pair()

@pytest.fixture(scope="session")
def bob(client):
    return client.generate_random_key_pair()
