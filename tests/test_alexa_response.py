import uuid

import pytest

from alexa_response import (
    AlexaResponse, build_confirmation, build_error, build_faulting_parameter, confirmation_name
)


@pytest.mark.parametrize("directive, expected", [
    ("TurnOnRequest", "TurnOnConfirmation"),
    ("TurnOffRequest", "TurnOffConfirmation"),
    ("SetPercentageRequest", "SetPercentageConfirmation"),
    ("IncrementPercentageRequest", "IncrementPercentageConfirmation"),
    ("DecrementPercentageRequest", "DecrementPercentageConfirmation"),
])
def test_confirmation_names(directive, expected):
    assert confirmation_name(directive) == expected
    response = build_confirmation(directive)
    assert response["header"]["name"] == expected
    assert response["payload"] == {}


def test_envelope_shape():
    response = build_error("TargetOfflineError")
    assert set(response) == {"header", "payload"}
    assert response["header"]["namespace"] == "Alexa.ConnectedHome.Control"
    assert response["header"]["payloadVersion"] == "2"
    # messageId ist eine UUID
    uuid.UUID(response["header"]["messageId"])


def test_faulting_parameter():
    response = build_faulting_parameter("percentageState", None)
    assert response["header"]["name"] == "UnexpectedInformationReceivedError"
    assert response["payload"] == {"faultingParameter": "percentageState: None"}


def test_payload_is_copied():
    payload = {"faultingParameter": "x: 1"}
    response = AlexaResponse(name="UnexpectedInformationReceivedError", payload=payload).get()
    payload["faultingParameter"] = "verändert"
    assert response["payload"]["faultingParameter"] == "x: 1"


def test_each_response_gets_new_message_id():
    ids = {build_confirmation("TurnOnRequest")["header"]["messageId"] for _ in range(20)}
    assert len(ids) == 20
