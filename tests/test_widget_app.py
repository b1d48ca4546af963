"""
Unit tests for the widget endpoints.
"""
from unittest.mock import MagicMock

import pytest

from widget.app import app


@pytest.fixture
def client():
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client
    app.config.pop("FACADE", None)


@pytest.fixture
def mock_facade():
    facade = MagicMock()
    app.config["FACADE"] = facade
    return facade


def test_waste_data(client, mock_facade):
    mock_facade.get_widget_data.return_value = [{"deviceId": "Storgata5", "wasteCapabilities": []}]

    response = client.get('/api/waste-data?deviceId=Storgata5&locale=en')

    assert response.status_code == 200
    assert response.get_json() == [{"deviceId": "Storgata5", "wasteCapabilities": []}]
    mock_facade.get_widget_data.assert_called_once_with(device_id="Storgata5", locale="en")


def test_waste_data_without_facade(client):
    response = client.get('/api/waste-data')
    assert response.status_code == 200
    assert response.get_json() == []


def test_tomorrow(client, mock_facade):
    mock_facade.get_waste_type_tomorrow.return_value = "Restavfall"
    mock_facade.get_tomorrow_flags.return_value = {"general": True, "paper": False}

    response = client.get('/api/tomorrow')

    assert response.get_json() == {
        "wasteType": "Restavfall",
        "categories": {"general": True, "paper": False},
    }


def test_is_specific_waste(client, mock_facade):
    mock_facade.is_specific_waste.return_value = True

    response = client.get('/api/is-specific-waste?wasteType=paper&when=tomorrow')

    assert response.get_json() == {"result": True}
    mock_facade.is_specific_waste.assert_called_once_with("paper", "tomorrow")
