# test_discovery.py

import pytest

import lambda_function
from alexa_auth import InvalidAccessTokenError
from alexa_device import DeviceRegistry
from lambda_function import handle_discovery, lambda_handler

APPLIANCES = [
    {
        "applianceId": "zeta-device",
        "manufacturerName": "Marantz",
        "modelName": "SR6010 Zeta",
        "version": "1.0",
        "friendlyName": "Zeta",
        "friendlyDescription": "Zeta via Marantz SR6010",
        "isReachable": False,
        "actions": ["turnOn", "turnOff"],
    },
    {
        "applianceId": "alpha-device",
        "manufacturerName": "Marantz",
        "modelName": "SR6010 Alpha",
        "version": "2.0",
        "friendlyName": "Alpha",
        "friendlyDescription": "Alpha via Marantz SR6010",
        "isReachable": True,
        "actions": ["turnOn", "turnOff", "setPercentage"],
    },
]


def discovery_request(token="access-token-from-skill"):
    payload = {} if token is None else {"accessToken": token}
    return {
        "header": {
            "namespace": "Alexa.ConnectedHome.Discovery",
            "name": "DiscoverAppliancesRequest",
            "payloadVersion": "2",
            "messageId": "123-456-789"
        },
        "payload": payload
    }


def test_discovery_returns_catalogue_in_order():
    registry = DeviceRegistry.from_config({"appliances": APPLIANCES})

    response = handle_discovery(discovery_request(), registry)

    header = response["header"]
    assert header["namespace"] == "Alexa.ConnectedHome.Discovery"
    assert header["name"] == "DiscoverAppliancesResponse"
    assert header["payloadVersion"] == "2"
    assert header["messageId"]
    # Einträge unverändert und in Katalog-Reihenfolge (nicht sortiert)
    assert response["payload"]["discoveredAppliances"] == APPLIANCES


def test_any_token_passes_stub_validation():
    registry = DeviceRegistry.from_config({"appliances": APPLIANCES})
    response = handle_discovery(discovery_request("irgendwas"), registry)
    assert len(response["payload"]["discoveredAppliances"]) == 2


@pytest.mark.parametrize("token", [None, "", "   "])
def test_discovery_without_token_fails(token):
    registry = DeviceRegistry.from_config({"appliances": APPLIANCES})
    with pytest.raises(InvalidAccessTokenError):
        handle_discovery(discovery_request(token), registry)


def test_discovery_rejected_token_short_circuits():
    registry = DeviceRegistry.from_config({"appliances": APPLIANCES})
    with pytest.raises(InvalidAccessTokenError):
        handle_discovery(discovery_request(), registry, validator=lambda token: False)


def test_lambda_handler_uses_bundled_catalogue(monkeypatch):
    monkeypatch.delenv("DEVICES_FILE", raising=False)
    monkeypatch.setattr(lambda_function, "_registry", None)

    response = lambda_handler(discovery_request(), None)

    endpoints = response["payload"]["discoveredAppliances"]
    assert [e["applianceId"] for e in endpoints] == ["marantz-sr6010-shield", "marantz-sr6010-cable"]
    for device in endpoints:
        assert device["isReachable"] is True
        assert "turnOn" in device["actions"]


def test_message_ids_are_fresh():
    registry = DeviceRegistry.from_config({"appliances": APPLIANCES})
    first = handle_discovery(discovery_request(), registry)
    second = handle_discovery(discovery_request(), registry)
    assert first["header"]["messageId"] != second["header"]["messageId"]
