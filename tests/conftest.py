import pytest

from catalog_admin.core.http import ApiClient
from catalog_admin.gateways import Gateways
from fakes import InMemoryCatalogSession


@pytest.fixture
def api_session():
    return InMemoryCatalogSession()


@pytest.fixture
def gateways(api_session):
    return Gateways(ApiClient(base_url="http://catalog.test", session=api_session))
