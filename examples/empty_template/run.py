from pathlib import Path

from suitekit import registry, run_all
from suitekit.plan import register_modules


def main() -> int:
    register_modules(["empty_tests.py"], Path(__file__).parent, registry)
    return run_all()


if __name__ == "__main__":
    raise SystemExit(main())
