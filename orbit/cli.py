import logging
import os
import sys
from pathlib import Path

import fncli

from . import db
from .core.errors import OrbitError
from .lib import ansi

VERBOSE_FLAGS = ("-v", "--verbose")


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main():
    user_args = sys.argv[1:]
    verbose = any(a in VERBOSE_FLAGS for a in user_args) or os.environ.get("ORBIT_DEBUG") == "1"
    user_args = [a for a in user_args if a not in VERBOSE_FLAGS]
    _configure_logging(verbose)

    db.init()
    fncli.autodiscover(Path(__file__).parent, "orbit")

    argv = ["orbit", *(user_args or ["habits"])]
    try:
        from .habits import default_store

        ansi.use_named(default_store().get_theme())
        code = fncli.dispatch(argv)
    except OrbitError as e:
        sys.stderr.write(f"{e}\n")
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
