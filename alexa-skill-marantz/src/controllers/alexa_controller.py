# controllers/alexa_controller.py

from abc import ABC, abstractmethod

# Wird an jede Befehlsliste angehängt, damit der Receiver seinen Status neu lädt
STATUS_REFRESH = "aspMainZone_WebUpdateStatus/"


class TranslationError(Exception):
    """Eine Direktive lässt sich nicht in Receiver-Befehle übersetzen."""


class UnsupportedDirectiveError(TranslationError):
    def __init__(self, name):
        super().__init__(f"Direktive '{name}' wird nicht unterstützt")
        self.name = name


class MissingFieldError(TranslationError):
    def __init__(self, field, value=None):
        super().__init__(f"Pflichtfeld fehlt: {field}: {value}")
        self.field = field
        self.value = value


class ValueOutOfRangeError(TranslationError):
    def __init__(self, field, value, minimum, maximum):
        super().__init__(f"{field}: {value} liegt nicht zwischen {minimum} und {maximum}")
        self.field = field
        self.value = value
        self.minimum = minimum
        self.maximum = maximum


class MissingStateError(TranslationError):
    def __init__(self, name):
        super().__init__(f"'{name}' braucht den aktuellen Receiver-Status")
        self.name = name


def get_value(payload, field, minimum, maximum):
    """
    Liest payload[field]["value"] als Zahl.
    Fehlt das Feld -> MissingFieldError, keine Zahl oder außerhalb der Grenzen -> ValueOutOfRangeError.
    """
    container = payload.get(field) if isinstance(payload, dict) else None
    value = container.get("value") if isinstance(container, dict) else None
    if value is None or value == "":
        raise MissingFieldError(field, value)

    # bool ist in Python ein int, zählt hier aber nicht als Prozentwert
    if isinstance(value, bool):
        raise ValueOutOfRangeError(field, value, minimum, maximum)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueOutOfRangeError(field, value, minimum, maximum) from None

    if not minimum <= number <= maximum:
        raise ValueOutOfRangeError(field, value, minimum, maximum)
    return number


def round_half_up(value):
    # round() in Python rundet auf die gerade Zahl, der Receiver soll aber 20.5 -> 21 bekommen
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


class AlexaController(ABC):
    @property
    @abstractmethod
    def directives(self):
        """Direktiven-Namen, die der Controller übersetzt."""
        pass

    @property
    @abstractmethod
    def actions(self):
        """Zuordnung Direktive -> action aus der Discovery."""
        pass

    @staticmethod
    def needs_state(name):
        """True, wenn vor dem Übersetzen der Receiver-Status gelesen werden muss."""
        return False

    @staticmethod
    def validate(name, payload):
        """Prüft die Pflichtfelder der Direktive, bevor irgendein Gerät angesprochen wird."""
        pass

    @staticmethod
    @abstractmethod
    def handle_directive(name, appliance_id, payload, current_state=None, input_functions=None):
        """Übersetzt eine Direktive in die Befehlsliste für den Receiver."""
        pass
