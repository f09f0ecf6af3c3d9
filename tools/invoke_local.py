#!/usr/bin/env python3

# tools/invoke_local.py

import json
import sys
import os

# Den Pfad zum Lambda-Quellcode hinzufügen
current_dir = os.path.dirname(os.path.abspath(__file__))
src_dir = os.path.join(os.path.dirname(current_dir), "alexa-skill-marantz", "src")
sys.path.insert(0, src_dir)

from lambda_function import lambda_handler  # noqa: E402


class MockContext:
    def __init__(self):
        self.function_name = "alexa_skill_marantz_local_test"
        self.memory_limit_in_mb = 128
        self.invoked_function_arn = "arn:aws:lambda:local:123456789:function:test"
        self.aws_request_id = "local-test-id"


def main():
    # 1. Prüfen, ob Daten via Pipe kommen
    if sys.stdin.isatty():
        print("Benutzung: echo '<json>' | RECEIVER_IP=192.168.1.20 python3 tools/invoke_local.py")
        return 1

    # 2. JSON von stdin lesen
    try:
        event = json.load(sys.stdin)
    except json.JSONDecodeError as e:
        print(f"Ungültiges JSON empfangen: {e}", file=sys.stderr)
        return 1

    # 3. Den echten Handler aufrufen
    print("\n--- LAMBDA EXECUTION START ---")
    response = lambda_handler(event, MockContext())

    # 4. Die Antwort formatiert ausgeben
    print("\n--- LAMBDA RESPONSE ---")
    print(json.dumps(response, indent=2))
    print("\n--- LAMBDA EXECUTION END ---")
    return 0


if __name__ == "__main__":
    sys.exit(main())

'''
DISCOVERY
echo '{
  "header": {
    "namespace": "Alexa.ConnectedHome.Discovery",
    "name": "DiscoverAppliancesRequest",
    "payloadVersion": "2",
    "messageId": "123"
  },
  "payload": { "accessToken": "access-token-from-skill" }
}' | python3 tools/invoke_local.py


TURN ON
echo '{
  "header": {
    "namespace": "Alexa.ConnectedHome.Control",
    "name": "TurnOnRequest",
    "payloadVersion": "2",
    "messageId": "msg-001"
  },
  "payload": {
    "accessToken": "access-token",
    "appliance": { "applianceId": "marantz-sr6010-shield" }
  }
}' | RECEIVER_IP=192.168.1.20 python3 tools/invoke_local.py


LAUTER
echo '{
  "header": {
    "namespace": "Alexa.ConnectedHome.Control",
    "name": "IncrementPercentageRequest",
    "payloadVersion": "2",
    "messageId": "msg-002"
  },
  "payload": {
    "accessToken": "access-token",
    "appliance": { "applianceId": "marantz-sr6010-cable" },
    "deltaPercentage": { "value": 10 }
  }
}' | RECEIVER_IP=192.168.1.20 python3 tools/invoke_local.py
'''
