"""Channel definitions from YAML files.

A channel file maps channel names to scenarios:

    user:
      welcome:
        subject:
          en: "Hi {{ name }}"
          fr: "Salut {{ name }}"
        template_ident: welcome-tpl

A directory is loaded file by file in name order (*.yml and *.yaml); a
channel defined in several files is taken from the last one.
"""

from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from infrastructure.communicator.errors import InvalidInputError
from infrastructure.logging import get_module_logger

logger = get_module_logger()

YAML_SUFFIXES = (".yml", ".yaml")


def _channel_files(path: Path) -> List[Path]:
    if path.is_dir():
        return sorted(p for p in path.iterdir() if p.suffix in YAML_SUFFIXES)
    return [path]


def load_channels(path: Union[str, Path]) -> Dict[str, Any]:
    """Load channel definitions from a YAML file or directory.

    Args:
        path: A YAML file, or a directory of YAML files.

    Returns:
        Map of channel names to scenarios, ready for add_channels().

    Raises:
        FileNotFoundError: If path does not exist.
        InvalidInputError: If a file cannot be parsed or does not hold a map
            of channels.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Channel definitions not found: {path}")

    channels: Dict[str, Any] = {}
    files = _channel_files(path)

    for channel_file in files:
        try:
            with open(channel_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error("yaml_parse_error", file=str(channel_file), error=str(e))
            raise InvalidInputError(f"Failed to parse {channel_file}: {e}") from e

        if data is None:
            continue

        if not isinstance(data, dict):
            logger.error(
                "invalid_channel_file", file=str(channel_file), expected="dict"
            )
            raise InvalidInputError(
                f"Expected a map of channel names and details in {channel_file}"
            )

        channels.update(data)

    logger.info(
        "loaded_channels",
        path=str(path),
        file_count=len(files),
        channel_count=len(channels),
    )
    return channels
