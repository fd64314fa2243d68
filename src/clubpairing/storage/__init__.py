from clubpairing.storage.json_store import default_state_path, load_club, save_club

__all__ = [
    "default_state_path",
    "load_club",
    "save_club",
]
