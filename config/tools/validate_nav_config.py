# tools/validate_nav_config.py

import sys           # for exit codes
from pprint import pprint  # for structured printing

# make src discoverable if running as a script
from pathlib import Path
# __file__ is .../config/tools/validate_nav_config.py
# parents[2] is the project root; append ROOT/src
PROJECT_ROOT = Path(__file__).resolve().parents[2]
sys.path.append(str(PROJECT_ROOT / "src"))

from dataclasses import asdict  # noqa: E402

import yaml  # noqa: E402

from env.loader import DEFAULT_CONFIG_PATH, load_nav_config  # noqa: E402


def main() -> None:
    """Load and print the navigation config, failing fast on errors."""
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_CONFIG_PATH
    try:
        config = load_nav_config(path)
    except (OSError, ValueError, yaml.YAMLError) as e:  # missing file, bad YAML, out-of-range value
        print("Navigation config validation FAILED:", file=sys.stderr)
        print(repr(e), file=sys.stderr)
        sys.exit(1)                          # non-zero exit: CI will mark as failed

    print("Navigation config OK:", path)
    print("\nWalker:")
    pprint(asdict(config.walker))
    print("\nExplorer:")
    pprint(asdict(config.explorer))
    print("\nAssist:")
    pprint(asdict(config.assist))


if __name__ == "__main__":
    main()  # run main() only when script is executed directly
