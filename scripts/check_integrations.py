"""Pre-flight check: test every configured publishing integration.

Usage:
    python scripts/check_integrations.py [integrations.json]

The file holds a JSON list of {"id", "provider", "config"} objects (the same
shape the dashboard stores). Defaults to PUBLISHER_INTEGRATIONS_FILE.
Exit code 1 when any integration fails.
"""

import asyncio
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dotenv import load_dotenv

load_dotenv()

from core.config import get_settings  # noqa: E402
from core.http import create_http_client  # noqa: E402
from core.logging import configure_logging  # noqa: E402
from db.models import Integration  # noqa: E402
from services.connections import ConnectionService  # noqa: E402


def load_integrations(path: Path) -> list[Integration]:
    raw = json.loads(path.read_text(encoding="utf-8"))
    return [Integration.model_validate(item) for item in raw]


async def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level, json=settings.log_json)

    path = Path(sys.argv[1]) if len(sys.argv) > 1 else settings.integrations_file
    if not path.exists():
        print(f"  [FAIL] {path} not found")
        sys.exit(1)

    print("=" * 60)
    print(f"Publishing integrations -- {path}")
    print("=" * 60)

    async with create_http_client(settings) as http_client:
        results = await ConnectionService(http_client).check_all(load_integrations(path))

    failed = 0
    for result in results:
        if result.ok:
            print(f"  [OK] {result.provider} {result.integration_id}")
        else:
            failed += 1
            print(f"  [FAIL] {result.provider} {result.integration_id}: {result.error}")

    print("\n" + "=" * 60)
    print(f"Results: {len(results) - failed} passed, {failed} failed")
    if failed:
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
