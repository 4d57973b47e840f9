"""
Runs the Mandrill payload adapter on a stored message.

Reads:
  - an .eml file (first argument, default payload_i_o/message.eml)
  - payload_i_o/extensions.json, if present (structured extension fields)

Produces:
  - payload_i_o/payload_result.json (message struct, or the full send
    request when --send-request is given)
"""
import json
import logging
import sys
from pathlib import Path

from mandrill_payload.config.settings import LOG_LEVEL

# ---------------------------------------------------------------------------
# Setup logging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger("run_payload")

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
ROOT = Path(__file__).parent
IO_DIR = ROOT / "payload_i_o"

args = [a for a in sys.argv[1:] if not a.startswith("--")]
SEND_REQUEST = "--send-request" in sys.argv[1:]

MESSAGE_FILE    = Path(args[0]) if args else IO_DIR / "message.eml"
EXTENSIONS_FILE = IO_DIR / "extensions.json"
OUTPUT_FILE     = IO_DIR / "payload_result.json"

# ---------------------------------------------------------------------------
# Load inputs
# ---------------------------------------------------------------------------
logger.info("Loading input...")

raw_message: bytes = MESSAGE_FILE.read_bytes()

extensions: dict = {}
if EXTENSIONS_FILE.exists():
    with open(EXTENSIONS_FILE, encoding="utf-8") as f:
        extensions = json.load(f)

logger.info("message file      : %s", MESSAGE_FILE)
logger.info("message size      : %d bytes", len(raw_message))
logger.info("extension fields  : %s", sorted(extensions) or "-")

# ---------------------------------------------------------------------------
# Build
# ---------------------------------------------------------------------------
from mandrill_payload.models.source_message import SourceMessage
from mandrill_payload.payload.assembler import build_send_request, to_payload

message = SourceMessage.from_bytes(raw_message, extensions)

if SEND_REQUEST:
    result = build_send_request(message)
    payload = result["message"]
else:
    result = to_payload(message)
    payload = result

# ---------------------------------------------------------------------------
# Save output
# ---------------------------------------------------------------------------
IO_DIR.mkdir(parents=True, exist_ok=True)
with open(OUTPUT_FILE, "w", encoding="utf-8") as f:
    json.dump(result, f, ensure_ascii=False, indent=2)

logger.info("Output saved to: %s", OUTPUT_FILE)

# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------
print("\n" + "=" * 70)
print("MANDRILL PAYLOAD - SUMMARY")
print("=" * 70)
print(f"from        : {payload['from_name'] or ''} <{payload['from_email']}>")
print(f"subject     : {payload['subject']}")

print(f"\nRecipients ({len(payload['to'])}):")
for r in payload["to"]:
    print(f"  [{r['type']:3s}] {r['name']} <{r['email']}>")

print(f"\nTags        : {', '.join(payload['tags']) or '-'}")
print(f"Attachments : {len(payload.get('attachments', []))}")
print(f"Images      : {len(payload.get('images', []))}")
if SEND_REQUEST:
    print(f"send_at     : {result['send_at']}")
    print(f"template    : {result.get('template_name', '-')}")

print("=" * 70)
print(f"Output: {OUTPUT_FILE}")
print("=" * 70 + "\n")
