# alexa_device.py

import json
import logging
import os
from dataclasses import dataclass, field
from types import MappingProxyType

logger = logging.getLogger(__name__)

SUPPORTED_ACTIONS = (
    "turnOn",
    "turnOff",
    "setPercentage",
    "incrementPercentage",
    "decrementPercentage",
)

DEFAULT_DEVICES_FILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), "devices.json")


class ApplianceNotFoundError(LookupError):
    def __init__(self, appliance_id):
        super().__init__(f"Appliance {appliance_id} nicht im Katalog")
        self.appliance_id = appliance_id


@dataclass(frozen=True)
class Appliance:
    appliance_id: str
    manufacturer_name: str
    model_name: str
    version: str
    friendly_name: str
    friendly_description: str
    is_reachable: bool = True
    actions: tuple = ()
    additional_details: tuple = field(default=(), compare=False)

    @classmethod
    def from_record(cls, record):
        """Baut ein Appliance aus einem Katalog-Eintrag (camelCase wie in der Discovery)."""
        appliance_id = record.get("applianceId")
        if not appliance_id:
            raise ValueError(f"Katalog-Eintrag ohne applianceId: {record}")

        actions = tuple(record.get("actions", []))
        unknown = [a for a in actions if a not in SUPPORTED_ACTIONS]
        if unknown:
            raise ValueError(f"{appliance_id}: unbekannte actions {unknown}")

        details = record.get("additionalApplianceDetails", {})
        return cls(
            appliance_id=appliance_id,
            manufacturer_name=record.get("manufacturerName", "Marantz"),
            model_name=record.get("modelName", "unknown"),
            version=record.get("version", "1.0"),
            friendly_name=record.get("friendlyName", appliance_id),
            friendly_description=record.get("friendlyDescription", ""),
            is_reachable=bool(record.get("isReachable", True)),
            actions=actions,
            additional_details=tuple(sorted(details.items())),
        )

    def supports(self, action):
        return action in self.actions

    def get_discovery_payload(self):
        """Der Eintrag genau so, wie er in discoveredAppliances landet."""
        payload = {
            "applianceId": self.appliance_id,
            "manufacturerName": self.manufacturer_name,
            "modelName": self.model_name,
            "version": self.version,
            "friendlyName": self.friendly_name,
            "friendlyDescription": self.friendly_description,
            "isReachable": self.is_reachable,
            "actions": list(self.actions),
        }
        if self.additional_details:
            payload["additionalApplianceDetails"] = dict(self.additional_details)
        return payload


class DeviceRegistry:
    """
    Statischer Gerätekatalog. Wird einmal geladen und danach nicht mehr verändert.
    """

    def __init__(self, appliances, input_functions=None):
        self._appliances = tuple(appliances)
        self._by_id = {}
        for appliance in self._appliances:
            if appliance.appliance_id in self._by_id:
                raise ValueError(f"applianceId doppelt im Katalog: {appliance.appliance_id}")
            self._by_id[appliance.appliance_id] = appliance
        self._input_functions = MappingProxyType(dict(input_functions or {}))

    def __len__(self):
        return len(self._appliances)

    @property
    def input_functions(self):
        return self._input_functions

    def list_appliances(self):
        return self._appliances

    def find_appliance(self, appliance_id):
        try:
            return self._by_id[appliance_id]
        except KeyError:
            raise ApplianceNotFoundError(appliance_id) from None

    @classmethod
    def from_config(cls, config):
        appliances = [Appliance.from_record(r) for r in config.get("appliances", [])]
        return cls(appliances, config.get("inputFunctions", {}))


def load_registry(path=None):
    """
    Lädt den Katalog aus einer JSON-Datei.
    Reihenfolge: Argument, DEVICES_FILE, mitgeliefertes devices.json
    """
    path = path or os.environ.get("DEVICES_FILE") or DEFAULT_DEVICES_FILE
    logger.info("Lade Gerätekatalog aus %s", path)

    with open(path, encoding="utf-8") as f:
        config = json.load(f)

    registry = DeviceRegistry.from_config(config)
    logger.info("%d Geräte geladen", len(registry))
    return registry
