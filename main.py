import logging
import sys
from pathlib import Path

from core.database import init_db
from services.file_manager import load_or_setup_paths
from services.member_service import load_registry
from services.report_service import generate_members_brief

"""
Entry point for the Gym Member Desk.
Run this file to set up the data folder, load the member store and print an overview.
An optional argument selects the data folder.
"""


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    base_path = Path(argv[0]) if argv else None
    load_or_setup_paths(base_path)
    init_db()

    registry = load_registry()
    print(generate_members_brief(registry))
    return 0


if __name__ == "__main__":
    sys.exit(main())
