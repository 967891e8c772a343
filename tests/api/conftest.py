import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from blog_api.network.http.server import create_server


@pytest.fixture(scope='function')
def server(settings) -> FastAPI:
    return create_server(settings)


@pytest.fixture(scope='function')
def client(server) -> TestClient:
    with TestClient(server) as c:
        yield c


@pytest.fixture(scope='function')
def unconfigured_client(unconfigured_settings) -> TestClient:
    """
    Get a client for a server started without any GitHub credentials
    """
    with TestClient(create_server(unconfigured_settings)) as c:
        yield c
