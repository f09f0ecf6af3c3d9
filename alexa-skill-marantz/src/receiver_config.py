# receiver_config.py

import logging
import os

import boto3

logger = logging.getLogger(__name__)

DEFAULT_PORT = 80
DEFAULT_TIMEOUT = 5.0

_ssm = None


class ReceiverConfigError(Exception):
    """Adresse des Receivers ist nicht (oder falsch) konfiguriert."""


def _get_ssm():
    # Client erst anlegen, wenn er gebraucht wird (Tests und lokale Läufe ohne AWS)
    global _ssm
    if _ssm is None:
        _ssm = boto3.client("ssm")
    return _ssm


def _parse_port(value):
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ReceiverConfigError(f"Ungültiger Port: {value}") from None
    if not 0 < port < 65536:
        raise ReceiverConfigError(f"Ungültiger Port: {value}")
    return port


def _split_endpoint(value):
    host, sep, port = value.strip().partition(":")
    if not host:
        raise ReceiverConfigError(f"Ungültige Receiver-Adresse: {value}")
    return host, _parse_port(port) if sep else DEFAULT_PORT


def _from_ssm(parameter_name):
    try:
        res = _get_ssm().get_parameter(Name=parameter_name, WithDecryption=True)
        return res["Parameter"]["Value"]
    except Exception as e:
        raise ReceiverConfigError(f"SSM Parameter {parameter_name} nicht lesbar: {e}") from e


def get_receiver_endpoint():
    """
    Liefert (host, port) des Receivers.
    Reihenfolge: RECEIVER_IP/RECEIVER_PORT (alt: receiverIp/receiverPort),
    danach der SSM Parameter aus RECEIVER_SSM_PARAMETER im Format host[:port].
    """
    host = os.environ.get("RECEIVER_IP") or os.environ.get("receiverIp")
    if host:
        port = os.environ.get("RECEIVER_PORT") or os.environ.get("receiverPort")
        return host, _parse_port(port) if port else DEFAULT_PORT

    parameter_name = os.environ.get("RECEIVER_SSM_PARAMETER")
    if parameter_name:
        logger.info("Lese Receiver-Adresse aus SSM: %s", parameter_name)
        return _split_endpoint(_from_ssm(parameter_name))

    raise ReceiverConfigError("Weder RECEIVER_IP noch RECEIVER_SSM_PARAMETER gesetzt")


def get_timeout():
    value = os.environ.get("RECEIVER_TIMEOUT")
    if not value:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(value)
    except ValueError:
        raise ReceiverConfigError(f"Ungültiger RECEIVER_TIMEOUT: {value}") from None
    if timeout <= 0:
        raise ReceiverConfigError(f"Ungültiger RECEIVER_TIMEOUT: {value}")
    return timeout
