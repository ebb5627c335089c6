import sys
from pathlib import Path

# Add src to sys.path automatically
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pg_neptune.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
