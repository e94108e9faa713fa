"""Pytest configuration and shared fixtures."""
import pytest
from fastapi.testclient import TestClient

from automarker.main import create_app
from automarker.marking.rules import get_preset
from automarker.settings import Settings

TEST_CODE = "TEST-CODE-01"

ALL_FOUR = (
	"You are a tour guide (role). Create a 7 day itinerary (task) for a first-time visitor "
	"staying in June (context). Give me bullets with costs and distance (format)."
)

UNRELATED_PROSE = (
	"The river moved slowly past the old mill while ducks drifted under the bridge and "
	"children laughed on the grassy bank during the warm quiet evening light."
)


def make_settings(**overrides) -> Settings:
	values = {
		"access_code": TEST_CODE,
		"cookie_secret": "test-cookie-secret",
		"cookie_secure": False,
	}
	values.update(overrides)
	return Settings(_env_file=None, **values)


@pytest.fixture
def settings():
	return make_settings()


@pytest.fixture
def lightweight():
	return get_preset("lightweight")


@pytest.fixture
def client(settings):
	"""Client for an app with the default (lightweight, rules) configuration."""
	return TestClient(create_app(settings))


@pytest.fixture
def unlocked_client(client):
	response = client.post("/api/unlock", json={"code": TEST_CODE})
	assert response.status_code == 200
	return client
