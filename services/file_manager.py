import logging
from pathlib import Path
from typing import Optional
import config

logger = logging.getLogger(__name__)


def ensure_folder(p: Path) -> None:
    """Creates the folder if it does not exist."""
    p.mkdir(parents=True, exist_ok=True)


def init_paths(base_path: Path) -> None:
    """
    Initialize all global paths based on the selected base path.
    Sets up the data folder, the member data file and the cards folder.
    """
    config.BASE_FOLDER = Path(base_path)
    ensure_folder(config.BASE_FOLDER)

    config.DATA_FILE = config.BASE_FOLDER / config.DATA_FILE_NAME

    config.CARDS_FOLDER = config.BASE_FOLDER / "Member Cards"
    ensure_folder(config.CARDS_FOLDER)


def load_or_setup_paths(base_path: Optional[Path] = None) -> Path:
    """
    Loads the data folder remembered in config.CONFIG_FILE.
    If there is none (or it no longer exists), uses base_path, falling back
    to a folder in the user's home directory, and remembers that choice.

    Returns:
        Path: The data folder in use.
    """
    config_file = Path(config.CONFIG_FILE)

    # 1. Try the remembered folder, unless the caller picked one explicitly
    if base_path is None and config_file.exists():
        try:
            content = config_file.read_text(encoding="utf-8").strip()
        except OSError as e:
            logger.warning("Could not read %s: %s", config_file, e)
            content = ""
        if content and Path(content).exists():
            init_paths(Path(content))
            return config.BASE_FOLDER

    # 2. First run (or stale config)
    data_path = Path(base_path) if base_path is not None else Path.home() / config.DEFAULT_FOLDER_NAME
    init_paths(data_path)

    # 3. Save the selection for next time
    try:
        config_file.write_text(str(data_path), encoding="utf-8")
    except OSError as e:
        logger.warning("Failed to save configuration: %s", e)

    return config.BASE_FOLDER
