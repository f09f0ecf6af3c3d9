# controllers/__init__.py

from .alexa_controller import (
    STATUS_REFRESH,
    TranslationError,
    UnsupportedDirectiveError,
    MissingFieldError,
    ValueOutOfRangeError,
    MissingStateError,
)
from .power_controller import PowerController
from .percentage_controller import PercentageController

CONTROLLERS = (PowerController, PercentageController)

# Direktive -> Controller, für die Suche im Router
CONTROLLER_MAPPING = {name: ctrl for ctrl in CONTROLLERS for name in ctrl.directives}


def find_controller(name):
    controller = CONTROLLER_MAPPING.get(name) if isinstance(name, str) else None
    if controller is None:
        raise UnsupportedDirectiveError(name)
    return controller


def action_for(name):
    """Die action aus der Discovery, die eine Direktive voraussetzt."""
    return find_controller(name).actions[name]


def needs_state(name):
    return find_controller(name).needs_state(name)


def validate(name, payload):
    return find_controller(name).validate(name, payload or {})


def translate(name, appliance_id, payload, current_state=None, input_functions=None):
    """Direktive -> geordnete Liste von Receiver-Befehlen."""
    controller = find_controller(name)
    return controller.handle_directive(name, appliance_id, payload or {}, current_state, input_functions)


__all__ = [
    "STATUS_REFRESH",
    "TranslationError",
    "UnsupportedDirectiveError",
    "MissingFieldError",
    "ValueOutOfRangeError",
    "MissingStateError",
    "PowerController",
    "PercentageController",
    "find_controller",
    "action_for",
    "needs_state",
    "validate",
    "translate",
]
