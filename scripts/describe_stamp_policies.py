"""Utility script listing the user stamp columns of configured models."""

from __future__ import annotations

import argparse
import importlib
import json
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import configure_mappers

from userstamp.infrastructure.registry import default_registry


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""

    parser = argparse.ArgumentParser(
        description="Print the create/update user stamp columns of every model.",
    )
    parser.add_argument(
        "modules",
        nargs="+",
        help="Dotted paths of the modules declaring the models (e.g. myapp.models)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit the policies as a JSON document instead of plain text.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log classification details while mappers are configured.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Import the requested modules and print their stamp policies."""

    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    for module_name in args.modules:
        try:
            importlib.import_module(module_name)
        except ImportError as exc:
            raise SystemExit(f"Could not import {module_name}: {exc}") from exc

    try:
        configure_mappers()
    except SQLAlchemyError as exc:
        raise SystemExit(f"Could not configure mappers: {exc}") from exc

    policies = {
        f"{cls.__module__}.{cls.__qualname__}": policy.as_dict()
        for cls, policy in sorted(
            default_registry.snapshot().items(),
            key=lambda item: (item[0].__module__, item[0].__qualname__),
        )
    }

    if args.json:
        print(json.dumps(policies, indent=2))
        return

    if not policies:
        print("No user stamped models found.")
        return

    for name, policy in policies.items():
        print(
            f"{name}\n"
            f"  on create: {', '.join(policy['on_create']) or '-'}\n"
            f"  on update: {', '.join(policy['on_update']) or '-'}"
        )


if __name__ == "__main__":
    main()
