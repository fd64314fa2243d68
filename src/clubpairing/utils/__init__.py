from clubpairing.utils.ids import generate_id
from clubpairing.utils.logging import app_data_dir, set_verbose, setup_logger

__all__ = [
    "app_data_dir",
    "generate_id",
    "set_verbose",
    "setup_logger",
]
