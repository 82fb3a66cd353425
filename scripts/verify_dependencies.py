#!/usr/bin/env python3
"""
Check that the analyzer's third-party libraries import in this environment.

Run after `pip install -e ".[test]"`; exits 1 listing anything missing.
"""

import sys
from importlib import import_module

# (import name, distribution name)
DEPENDENCIES = [
    ("httpx", "httpx"),
    ("pydantic", "pydantic"),
    ("structlog", "structlog"),
    ("dotenv", "python-dotenv"),
    ("rich", "rich"),
    ("jinja2", "Jinja2"),
    ("pytest", "pytest"),
    ("pytest_mock", "pytest-mock"),
]


def verify_imports():
    """Import each dependency and exit with the result."""
    missing = []

    print("Checking github-profile-analyzer dependencies...\n")

    for module_name, display_name in DEPENDENCIES:
        try:
            import_module(module_name)
            print(f"  [OK] {display_name}")
        except ImportError as e:
            print(f"  [FAILED] {display_name}: {e}")
            missing.append(display_name)

    print()

    if missing:
        print(f"[ERROR] Missing {len(missing)}: {', '.join(missing)}")
        print('Install them with: pip install -e ".[test]"')
        sys.exit(1)

    print(f"[SUCCESS] All {len(DEPENDENCIES)} dependencies import.")
    sys.exit(0)


if __name__ == "__main__":
    verify_imports()
