from __future__ import annotations

import sys
from pathlib import Path


def _ensure_package_on_path() -> None:
    """Insert the source root into ``sys.path`` when run as a script.

    Running ``python src/rempower/__main__.py`` resolves imports as if this
    file lived at the top of ``sys.path``, so ``rempower`` itself would not be
    importable with absolute imports. Adding the parent directory keeps the
    package importable both installed and from a checkout.
    """

    package_dir = Path(__file__).resolve().parent
    project_root = package_dir.parent
    project_root_str = str(project_root)
    if project_root_str not in sys.path:
        sys.path.insert(0, project_root_str)


def _load_cli():
    _ensure_package_on_path()
    from rempower.cli import cli as rem_cli

    return rem_cli


cli = _load_cli()
app = cli.app


def main() -> None:
    """Entrypoint for the ``rem`` console script."""

    cli.run()


if __name__ == "__main__":
    main()
