"""
Run Alembic against the bundled migrations without an alembic.ini.

Usage (from the notgiphy_api directory):
    python -m src.db.run_migrations upgrade head
    python -m src.db.run_migrations downgrade base
    python -m src.db.run_migrations current
"""

import logging
import sys
from pathlib import Path
from typing import Callable, Dict, List, Tuple

from alembic import command
from alembic.config import Config

from src.db.config import get_settings

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"

# name -> (alembic command, arguments used when none are given)
_COMMANDS: Dict[str, Tuple[Callable[..., object], List[str]]] = {
    "upgrade": (command.upgrade, ["head"]),
    "downgrade": (command.downgrade, ["-1"]),
    "stamp": (command.stamp, ["head"]),
    "current": (command.current, []),
    "history": (command.history, []),
    "heads": (command.heads, []),
}


# PUBLIC_INTERFACE
def build_config() -> Config:
    """Alembic config for the bundled migrations and the current DATABASE_URL."""
    cfg = Config()
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    # ConfigParser interpolation treats '%' as special
    cfg.set_main_option("sqlalchemy.url", get_settings().DATABASE_URL.replace("%", "%%"))
    return cfg


# PUBLIC_INTERFACE
def main(argv: List[str] | None = None) -> None:
    """Run one Alembic command, e.g. ``main(["upgrade", "head"])``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        raise SystemExit(f"usage: run_migrations {{{','.join(_COMMANDS)}}} [revision]")

    name, rest = args[0], args[1:]
    if name not in _COMMANDS:
        raise SystemExit(f"Unsupported Alembic command: {name}")

    func, defaults = _COMMANDS[name]
    rest = rest or defaults
    logger.info("alembic %s %s", name, " ".join(rest))
    func(build_config(), *rest)


if __name__ == "__main__":
    main()
