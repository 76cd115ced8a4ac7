#!/usr/bin/env python
"""OrgHub management commands (migrate, createadmin, runserver, ...)."""
import os
import sys


def main():
    from src.config.env import env

    os.environ.setdefault("DJANGO_SETTINGS_MODULE", env.settings_module)

    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Django is not importable. Install the project with "
            "`pip install -e .` inside the active virtual environment."
        ) from exc

    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
