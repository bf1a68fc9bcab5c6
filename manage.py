#!/usr/bin/env python
"""
Command-line entry point of the tennis camp project.

Besides Django's own commands (``runserver``, ``migrate``,
``createsuperuser``) it exposes ``bootstrap_camps``, which seeds the
camp calendar. ``python manage.py help`` lists everything.
"""

import os
import sys


def main():
    """Point Django at the project settings and dispatch ``sys.argv``."""
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "tennis_camp.settings")
    from django.core.management import execute_from_command_line

    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
