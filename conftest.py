import sys
import os

# Pfade sofort setzen, nicht erst in einer Fixture!
BASE_DIR = os.path.abspath(os.path.dirname(__file__))
paths = [
    os.path.join(BASE_DIR, 'alexa-skill-marantz', 'src'),
]

for p in paths:
    if p not in sys.path:
        sys.path.insert(0, p)

# boto3 braucht eine Region, auch wenn in den Tests nie AWS angesprochen wird
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-1")
