# marantz_api.py

import http.client
import logging
import math
import urllib.error
import urllib.parse
import urllib.request
import xml.etree.ElementTree as ET
from dataclasses import dataclass

from receiver_config import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

CONTROL_PATH = "/MainZone/index.put.asp"
STATUS_PATH = "/goform/formMainZone_MainZoneXml.xml"

# Manche Antworten haben diesen Text vor dem eigentlichen XML
STATUS_ARTIFACT = "undefined"


class TransportError(Exception):
    """Der Receiver war nicht erreichbar oder hat Unsinn geantwortet."""


class ReceiverUnreachableError(TransportError):
    pass


class ReceiverTimeoutError(TransportError):
    pass


class MalformedStateError(TransportError):
    pass


@dataclass(frozen=True)
class DeviceState:
    volume: float  # Betrag der Dämpfung, 0 = am lautesten, 80 = am leisesten
    raw_volume: str = ""
    power: str | None = None
    input_function: str | None = None


def _url(host, port, path):
    return f"http://{host}:{port}{path}"


def encode_commands(commands):
    """["A", "B"] -> {"cmd0": "A", "cmd1": "B"}"""
    return {f"cmd{i}": cmd for i, cmd in enumerate(commands)}


def _request(req, timeout):
    """Schickt den Request und liest die Antwort komplett, bevor es zurückgeht."""
    try:
        with urllib.request.urlopen(req, timeout=timeout) as response:
            return response.read().decode("utf-8", errors="replace")
    except urllib.error.HTTPError as e:
        raise ReceiverUnreachableError(f"HTTP {e.code} von {req.full_url}") from e
    except urllib.error.URLError as e:
        if isinstance(e.reason, TimeoutError):
            raise ReceiverTimeoutError(f"Timeout nach {timeout}s: {req.full_url}") from e
        raise ReceiverUnreachableError(f"{req.full_url} nicht erreichbar: {e.reason}") from e
    except TimeoutError as e:
        raise ReceiverTimeoutError(f"Timeout nach {timeout}s: {req.full_url}") from e
    except (http.client.HTTPException, OSError) as e:
        raise ReceiverUnreachableError(f"Fehler beim Lesen von {req.full_url}: {e}") from e


def send_commands(host, port, commands, timeout=None):
    """
    Schickt alle Befehle in einem POST an den Receiver (cmd0, cmd1, ...).
    Gibt die gesendeten Formularfelder zurück, sobald die Antwort vollständig gelesen ist.
    """
    post_data = encode_commands(commands)
    data = urllib.parse.urlencode(post_data)
    logger.debug("MarantzAPI POST Data: %s", data)

    req = urllib.request.Request(_url(host, port, CONTROL_PATH), data=data.encode("utf-8"), method="POST")
    req.add_header("Content-Type", "application/x-www-form-urlencoded")

    body = _request(req, timeout or DEFAULT_TIMEOUT)
    logger.debug("API Request Complete: %s", body)
    return post_data


def parse_state(body):
    """XML aus formMainZone_MainZoneXml.xml -> DeviceState"""
    text = body.strip()
    if text.startswith(STATUS_ARTIFACT):
        text = text[len(STATUS_ARTIFACT):].lstrip()

    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise MalformedStateError(f"Status-XML nicht lesbar: {e}") from e

    def value_of(tag):
        node = root.find(f"./{tag}/value")
        if node is None:
            node = root.find(f".//{tag}/value")
        return node.text.strip() if node is not None and node.text else None

    raw_volume = value_of("MasterVolume")
    if raw_volume is None:
        raise MalformedStateError("MasterVolume fehlt im Status-XML")
    try:
        volume = abs(float(raw_volume))
    except ValueError:
        # z.B. "--" wenn die Zone aus ist
        raise MalformedStateError(f"MasterVolume ist keine Zahl: {raw_volume}") from None
    if not math.isfinite(volume):
        raise MalformedStateError(f"MasterVolume ist keine Zahl: {raw_volume}")

    return DeviceState(
        volume=volume,
        raw_volume=raw_volume,
        power=value_of("Power"),
        input_function=value_of("InputFuncSelect"),
    )


def get_device_state(host, port, timeout=None):
    req = urllib.request.Request(_url(host, port, STATUS_PATH), method="GET")
    body = _request(req, timeout or DEFAULT_TIMEOUT)
    logger.debug("Status XML: %s", body)

    state = parse_state(body)
    logger.info(f"Receiver Status: Volume {state.raw_volume} (Betrag {state.volume}), Power {state.power}")
    return state
