# lambda_function.py
import logging
import json
import os
import time

import marantz_api
from alexa_auth import InvalidAccessTokenError, check_access_token, is_valid_token
from alexa_device import ApplianceNotFoundError, load_registry
from alexa_response import (
    CONTROL_NAMESPACE, DISCOVERY_NAMESPACE,
    INVALID_ACCESS_TOKEN, TARGET_OFFLINE, UNSUPPORTED_OPERATION, DRIVER_INTERNAL,
    build_confirmation, build_discovery_response, build_error,
    build_faulting_parameter, build_value_out_of_range
)
from controllers import (
    TranslationError, UnsupportedDirectiveError, MissingFieldError, ValueOutOfRangeError,
    action_for, needs_state, translate, validate
)
from receiver_config import ReceiverConfigError, get_receiver_endpoint, get_timeout

logger = logging.getLogger()
logger.setLevel(os.environ.get("LOG_LEVEL", "INFO").upper())

DEPLOY_DATE = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())

# Katalog einmal pro Lambda-Container laden (Warm-Starts nutzen ihn wieder)
_registry = None


class UnsupportedNamespaceError(Exception):
    """Namespace, den der Skill nicht kennt. Geht als Fehler an die Plattform zurück."""


def get_registry():
    global _registry
    if _registry is None:
        _registry = load_registry()
    return _registry


def handle_discovery(request, registry, validator=is_valid_token):
    """
    Antwort auf DiscoverAppliancesRequest: alle Geräte aus dem Katalog.
    Ohne gültiges Token gibt es keine Liste, sondern einen Fehler an die Plattform.
    """
    logger.debug("Discovery Request: %s", json.dumps(request))

    if not check_access_token(request, validator):
        message_id = (request.get("header") or {}).get("messageId")
        raise InvalidAccessTokenError(f"Discovery Request [{message_id}] failed. Invalid access token")

    response = build_discovery_response(registry.list_appliances())
    logger.info("DISCOVERY RESPONSE: %s", json.dumps(response))
    return response


def _translation_error_response(error):
    if isinstance(error, MissingFieldError):
        return build_faulting_parameter(error.field, error.value)
    if isinstance(error, ValueOutOfRangeError):
        return build_value_out_of_range(error.minimum, error.maximum)
    if isinstance(error, UnsupportedDirectiveError):
        return build_error(UNSUPPORTED_OPERATION)
    return build_error(DRIVER_INTERNAL)


def handle_control(request, registry, validator=is_valid_token):
    """
    Verarbeitet TurnOn/TurnOff und die Prozent-Direktiven.
    Jeder Fehler hier endet als Fehler-Antwort, nie als Exception.
    """
    logger.debug("Control Request: %s", json.dumps(request))

    header = request.get("header") or {}
    name = header.get("name")
    payload = request.get("payload")
    if not isinstance(payload, dict):
        payload = {}

    # 1. Token
    if not check_access_token(request, validator):
        return build_error(INVALID_ACCESS_TOKEN)

    # 2. applianceId
    appliance = payload.get("appliance")
    appliance_id = appliance.get("applianceId") if isinstance(appliance, dict) else None
    if not appliance_id or not isinstance(appliance_id, str):
        logger.error("No applianceId provided in request")
        return build_faulting_parameter("applianceId", appliance_id)

    # 3. Direktive
    try:
        action = action_for(name)
    except UnsupportedDirectiveError:
        logger.error(f"No supported directive name: {name}")
        return build_error(UNSUPPORTED_OPERATION)

    # 4. Gerät im Katalog?
    try:
        device = registry.find_appliance(appliance_id)
    except ApplianceNotFoundError:
        logger.error(f"Appliance {appliance_id} nicht im Katalog gefunden!")
        return build_faulting_parameter("applianceId", appliance_id)

    if not device.supports(action):
        logger.error(f"{appliance_id} unterstützt '{action}' nicht")
        return build_error(UNSUPPORTED_OPERATION)

    if not device.is_reachable:
        logger.error(f"Device offline: {appliance_id}")
        return build_error(TARGET_OFFLINE)

    # 5. Pflichtfelder, bevor der Receiver angesprochen wird
    try:
        validate(name, payload)
    except TranslationError as e:
        logger.error(f"{name} abgelehnt: {e}")
        return _translation_error_response(e)

    try:
        host, port = get_receiver_endpoint()
        timeout = get_timeout()
    except ReceiverConfigError as e:
        logger.error(f"Receiver nicht konfiguriert: {e}")
        return build_error(DRIVER_INTERNAL)

    # 6. Erst lesen (nur relative Änderungen), dann schreiben
    try:
        current_state = None
        if needs_state(name):
            current_state = marantz_api.get_device_state(host, port, timeout)

        commands = translate(name, appliance_id, payload, current_state, registry.input_functions)
        logger.info(f"MarantzAPI Invoked: {json.dumps(commands)}")
        marantz_api.send_commands(host, port, commands, timeout)
    except marantz_api.TransportError as e:
        logger.error(f"Receiver Fehler bei {name}: {e}")
        return build_error(DRIVER_INTERNAL)
    except TranslationError as e:
        logger.error(f"{name} nicht übersetzbar: {e}")
        return _translation_error_response(e)

    response = build_confirmation(name)
    logger.info("CONTROL RESPONSE: %s", json.dumps(response))
    return response


def lambda_handler(request, context):
    logger.info(f"--- LAMBDA START: {DEPLOY_DATE} ---")

    # Logge den kompletten Request, damit wir sehen, was Alexa genau will
    logger.info("FULL REQUEST: %s", json.dumps(request))

    header = request.get("header") if isinstance(request, dict) else None
    namespace = header.get("namespace") if isinstance(header, dict) else None
    name = header.get("name") if isinstance(header, dict) else None

    logger.info(f"Namespace: {namespace} | Name: {name}")

    # 1. DISCOVERY
    if namespace == DISCOVERY_NAMESPACE:
        return handle_discovery(request, get_registry())

    # 2. CONTROL
    if namespace == CONTROL_NAMESPACE:
        return handle_control(request, get_registry())

    # Alexa.ConnectedHome.Query ist nicht implementiert und landet ebenfalls hier
    error_message = f"No supported namespace: {namespace}"
    logger.error(error_message)
    raise UnsupportedNamespaceError(error_message)
