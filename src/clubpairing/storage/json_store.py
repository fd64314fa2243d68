"""Save and load the whole club as a JSON file."""

# Club Pairing
# Copyright (C) 2025  Club Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import json
import os
from pathlib import Path
from typing import Union

from clubpairing.constants import DEFAULT_SAVE_FILE
from clubpairing.controllers.club import Club
from clubpairing.exceptions import (
    ClubPairingException,
    FileLoadException,
    FileSaveException,
)
from clubpairing.utils import app_data_dir, setup_logger

logger = setup_logger(__name__)

# bumped when the saved layout changes incompatibly
FORMAT_VERSION = 1

PathLike = Union[str, "os.PathLike[str]"]


def default_state_path() -> Path:
    """Default save file in the per-user app data folder."""
    return Path(app_data_dir()) / DEFAULT_SAVE_FILE


def save_club(club: Club, path: PathLike) -> Path:
    """Write ``club`` to ``path``.

    The file is written next to its destination first and then moved into
    place, so an interrupted save never leaves half a file behind.

    Parameters
    ----------
    club : Club
        The club to save
    path : str or PathLike
        Destination file

    Returns
    -------
    Path
        The written file

    Raises
    ------
    FileSaveException
        When the file cannot be written
    """
    target = Path(path)
    data = {"format_version": FORMAT_VERSION, **club.to_dict()}
    tmp_path = target.with_name(target.name + ".tmp")
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=4)
        os.replace(tmp_path, target)
    except (OSError, TypeError, ValueError) as e:
        logger.exception("Error saving club to %s", target)
        try:
            tmp_path.unlink()
        except FileNotFoundError:
            pass
        except OSError:
            logger.warning("Could not remove partial save %s", tmp_path)
        raise FileSaveException(f"Could not save to {target}: {e}") from e
    logger.info("Club saved to %s", target)
    return target


def load_club(path: PathLike) -> Club:
    """Read a club saved with :func:`save_club`.

    A missing file yields an empty club.

    Raises
    ------
    FileLoadException
        When the file exists but cannot be read or understood
    """
    source = Path(path)
    if not source.exists():
        logger.info("No saved club at %s, starting empty", source)
        return Club()
    try:
        with open(source, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.exception("Error loading club from %s", source)
        raise FileLoadException(f"Could not load {source}: {e}") from e

    version = data.get("format_version", FORMAT_VERSION) if isinstance(data, dict) else None
    if version != FORMAT_VERSION:
        raise FileLoadException(
            f"{source} has unsupported format version {version!r}"
        )
    try:
        return Club.from_dict(data)
    except (ClubPairingException, KeyError, ValueError, TypeError) as e:
        logger.exception("Malformed club data in %s", source)
        raise FileLoadException(f"Malformed club data in {source}: {e}") from e
