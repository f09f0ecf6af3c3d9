# alexa_response.py

import uuid

PAYLOAD_VERSION = "2"

CONTROL_NAMESPACE = "Alexa.ConnectedHome.Control"
DISCOVERY_NAMESPACE = "Alexa.ConnectedHome.Discovery"

# Fehlernamen der Smart Home API v2
INVALID_ACCESS_TOKEN = "InvalidAccessTokenError"
UNEXPECTED_INFORMATION = "UnexpectedInformationReceivedError"
TARGET_OFFLINE = "TargetOfflineError"
UNSUPPORTED_OPERATION = "UnsupportedOperationError"
VALUE_OUT_OF_RANGE = "ValueOutOfRangeError"
DRIVER_INTERNAL = "DriverInternalError"


class AlexaResponse:
    """
    Header + Payload einer ausgehenden Nachricht.
    Jede Instanz bekommt ihre eigene messageId.
    """

    def __init__(self, namespace=CONTROL_NAMESPACE, name="", payload=None):
        self.header = {
            "messageId": str(uuid.uuid4()),
            "name": name,
            "namespace": namespace,
            "payloadVersion": PAYLOAD_VERSION
        }
        self.payload = dict(payload) if payload else {}

    def set_payload_appliances(self, appliances):
        self.payload["discoveredAppliances"] = list(appliances)

    def get(self):
        return {
            "header": dict(self.header),
            "payload": self.payload
        }


def confirmation_name(directive_name):
    """TurnOnRequest -> TurnOnConfirmation"""
    base = directive_name[:-len("Request")] if directive_name.endswith("Request") else directive_name
    return f"{base}Confirmation"


def build_confirmation(directive_name):
    return AlexaResponse(CONTROL_NAMESPACE, confirmation_name(directive_name)).get()


def build_error(error_name, payload=None):
    return AlexaResponse(CONTROL_NAMESPACE, error_name, payload).get()


def build_faulting_parameter(field, value):
    # Format wie von Alexa erwartet: "<feld>: <wert>"
    return build_error(UNEXPECTED_INFORMATION, {"faultingParameter": f"{field}: {value}"})


def build_value_out_of_range(minimum, maximum):
    return build_error(VALUE_OUT_OF_RANGE, {"minimumValue": minimum, "maximumValue": maximum})


def build_discovery_response(appliances):
    """Erstellt die DiscoverAppliancesResponse aus einer Liste von Appliance-Objekten."""
    adr = AlexaResponse(DISCOVERY_NAMESPACE, "DiscoverAppliancesResponse")
    adr.set_payload_appliances(a.get_discovery_payload() for a in appliances)
    return adr.get()
