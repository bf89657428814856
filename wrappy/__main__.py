# wrappy/__main__.py
import sys

from wrappy.cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main(sys.argv[1:]))
