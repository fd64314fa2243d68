"""Logging utilities."""

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


import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from PyQt6 import QtCore

# the logger format used
LOG_FMT = "LVL: %(levelname)s | FILE PATH: %(pathname)s | FUN: %(funcName)s | msg: %(message)s | ln#:%(lineno)d"

LOG_FILE_NAME = "club-pairing.log"

# one rotating handler shared by every module logger
_file_handler: Optional[RotatingFileHandler] = None


def app_data_dir() -> str:
    """Return the writable per-user folder for Club Pairing data.

    Qt's AppDataLocation is preferred, then its TempLocation.

    Returns
    -------
    str
        Absolute folder path, created if missing
    """
    folder = QtCore.QStandardPaths.writableLocation(
        QtCore.QStandardPaths.StandardLocation.AppDataLocation
    )
    if not folder:
        folder = QtCore.QStandardPaths.writableLocation(
            QtCore.QStandardPaths.StandardLocation.TempLocation
        )
    folder = os.path.join(folder, "clubpairing")
    os.makedirs(folder, exist_ok=True)
    return folder


def _get_file_handler(log_formatter: logging.Formatter) -> Optional[RotatingFileHandler]:
    global _file_handler
    if _file_handler is not None:
        return _file_handler
    try:
        log_folder = os.path.join(app_data_dir(), "logs")
        os.makedirs(log_folder, exist_ok=True)
        log_path = os.path.join(log_folder, LOG_FILE_NAME)
        # Use RotatingFileHandler to prevent unbounded log growth
        _file_handler = RotatingFileHandler(
            log_path, maxBytes=5 * 1024 * 1024, backupCount=5, encoding="utf-8"
        )
        _file_handler.setFormatter(log_formatter)
    except OSError:
        # If we can't create the folder, continue without file logging
        _file_handler = None
    return _file_handler


# --- Logging Setup ---
def setup_logger(logger_name: str) -> logging.Logger:
    """Set up logger for a python module.

    Sets up file handler and console handler

    Parameters
    ----------
    logger_name : str
        The name for the logger, __name__ is idiomatic

    Returns
    -------
    logging.Logger
        the created logger
    """
    lgr = logging.getLogger(name=logger_name)
    lgr.setLevel(logging.INFO)  # Set minimum level
    # Remove any existing handlers on this logger to avoid duplicates
    for _h in list(lgr.handlers):
        lgr.removeHandler(_h)
    log_formatter = logging.Formatter(LOG_FMT)

    # Console Handler, warnings and up so command output stays readable
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    console_handler.setLevel(logging.WARNING)
    lgr.addHandler(console_handler)

    file_handler = _get_file_handler(log_formatter)
    if file_handler:
        lgr.addHandler(file_handler)
    lgr.debug("logger %s initialized", logger_name)
    return lgr


def set_verbose(verbose: bool) -> None:
    """Switch every Club Pairing logger between INFO and DEBUG."""
    level = logging.DEBUG if verbose else logging.INFO
    for name, lgr in logging.Logger.manager.loggerDict.items():
        if name.startswith("clubpairing") and isinstance(lgr, logging.Logger):
            lgr.setLevel(level)
            for handler in lgr.handlers:
                if isinstance(handler, logging.StreamHandler) and not isinstance(
                    handler, RotatingFileHandler
                ):
                    handler.setLevel(level if verbose else logging.WARNING)
