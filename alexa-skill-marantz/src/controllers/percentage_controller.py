# controllers/percentage_controller.py

import logging
from .alexa_controller import (
    AlexaController, STATUS_REFRESH, MissingStateError, UnsupportedDirectiveError,
    get_value, round_half_up
)

logger = logging.getLogger(__name__)

VOLUME_SET = "PutMasterVolumeSet/-{}"

# Der Receiver arbeitet mit Dämpfung: 0 = am lautesten, 80 = am leisesten
MAX_ATTENUATION = 80

# Relative Änderungen landen nie ganz oben oder ganz unten auf der Skala
LOUDEST_CLAMP = 10
QUIETEST_CLAMP = 70


def percentage_to_attenuation(percentage):
    """100% -> 0, 0% -> 80"""
    return round_half_up(((100 - percentage) / 100) * MAX_ATTENUATION)


def adjust_attenuation(current, delta, louder):
    """
    Neue Dämpfung nach einer relativen Änderung um delta Prozent.
    Negative Ergebnisse werden zu 10, Ergebnisse über 80 zu 70.
    """
    step = (delta / 100) * MAX_ATTENUATION
    raw = round_half_up(current - step if louder else current + step)

    if raw < 0:
        logger.info(f"Lautstärke {raw} unter 0, begrenze auf {LOUDEST_CLAMP}")
        return LOUDEST_CLAMP
    if raw > MAX_ATTENUATION:
        logger.info(f"Lautstärke {raw} über {MAX_ATTENUATION}, begrenze auf {QUIETEST_CLAMP}")
        return QUIETEST_CLAMP
    return raw


def _current_volume(current_state):
    # Entweder ein DeviceState aus marantz_api oder direkt die Zahl
    volume = getattr(current_state, "volume", current_state)
    return abs(float(volume))


class PercentageController(AlexaController):
    directives = ("SetPercentageRequest", "IncrementPercentageRequest", "DecrementPercentageRequest")
    actions = {
        "SetPercentageRequest": "setPercentage",
        "IncrementPercentageRequest": "incrementPercentage",
        "DecrementPercentageRequest": "decrementPercentage",
    }

    @staticmethod
    def needs_state(name):
        return name in ("IncrementPercentageRequest", "DecrementPercentageRequest")

    @staticmethod
    def validate(name, payload):
        if name == "SetPercentageRequest":
            return get_value(payload, "percentageState", 0, 100)
        if name in ("IncrementPercentageRequest", "DecrementPercentageRequest"):
            return get_value(payload, "deltaPercentage", 0, 100)
        raise UnsupportedDirectiveError(name)

    @staticmethod
    def handle_directive(name, appliance_id, payload, current_state=None, input_functions=None):
        logger.info(f"PercentageController: Handling '{name}' für {appliance_id}")

        value = PercentageController.validate(name, payload)

        # 1. Absolute Lautstärke: "Stelle Shield auf 30 Prozent"
        if name == "SetPercentageRequest":
            volume = percentage_to_attenuation(value)

        # 2. Relative Lautstärke: "Erhöhe Shield um 10 Prozent"
        else:
            if current_state is None:
                raise MissingStateError(name)
            current = _current_volume(current_state)
            volume = adjust_attenuation(current, value, louder=(name == "IncrementPercentageRequest"))
            logger.info(f"Volume adjustment: {current} -> {volume} (Delta: {value}%)")

        return [VOLUME_SET.format(volume), STATUS_REFRESH]
