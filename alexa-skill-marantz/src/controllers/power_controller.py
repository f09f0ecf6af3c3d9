# controllers/power_controller.py

import logging
from .alexa_controller import AlexaController, STATUS_REFRESH, UnsupportedDirectiveError

# Logger konfigurieren
logger = logging.getLogger(__name__)

POWER_ON = "PutZone_OnOff/ON"
POWER_OFF = "PutZone_OnOff/OFF"
INPUT_FUNCTION = "PutZone_InputFunction/{}"


class PowerController(AlexaController):
    directives = ("TurnOnRequest", "TurnOffRequest")
    actions = {"TurnOnRequest": "turnOn", "TurnOffRequest": "turnOff"}

    @staticmethod
    def handle_directive(name, appliance_id, payload, current_state=None, input_functions=None):
        logger.info(f"PowerController: Handling '{name}' für {appliance_id}")

        if name == "TurnOffRequest":
            return [POWER_OFF, STATUS_REFRESH]

        if name != "TurnOnRequest":
            raise UnsupportedDirectiveError(name)

        # Einschalten muss vor der Eingangswahl kommen
        commands = [POWER_ON]

        # Jedes Gerät hängt an einem festen Eingang des Receivers.
        # Kein Eintrag in der Tabelle heißt: Eingang bleibt wie er ist.
        source = (input_functions or {}).get(appliance_id)
        if source:
            commands.append(INPUT_FUNCTION.format(source))
        else:
            logger.debug(f"Kein Eingang für {appliance_id} hinterlegt")

        commands.append(STATUS_REFRESH)
        return commands
