import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.config import Settings  # noqa: E402


def find_env_vars():
    """Map every environment variable the settings model reads to whether it is required."""
    env_vars = {}
    for name, field in Settings.model_fields.items():
        env_vars[field.alias or name.upper()] = field.is_required()
    return dict(sorted(env_vars.items()))


def verify_environment():
    env_vars = find_env_vars()
    missing_required = [name for name, required in env_vars.items() if required and not os.getenv(name)]
    using_defaults = [name for name, required in env_vars.items() if not required and not os.getenv(name)]

    print("=== ENV VAR VERIFICATION ===")
    print(f"Settings reference: {len(env_vars)} unique vars")
    print("")
    if missing_required:
        print(f"MISSING REQUIRED ({len(missing_required)}):")
        for v in missing_required:
            print(f"  - {v}")
    else:
        print("All required vars are set.")
    print("")
    if using_defaults:
        print(f"USING DEFAULTS ({len(using_defaults)}):")
        for v in using_defaults:
            print(f"  - {v}")
    return 1 if missing_required else 0


if __name__ == "__main__":
    sys.exit(verify_environment())
