import os
import json

from config import WALLET_STORAGE_FILE


class LocalStorage:
    """Persistent string key/value store kept in a JSON file."""

    def __init__(self, path: str = WALLET_STORAGE_FILE):
        self.path = path

    def _load(self):
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _save(self, data):
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def get_item(self, key: str):
        return self._load().get(key)

    def set_item(self, key: str, value: str):
        data = self._load()
        data[key] = value
        self._save(data)

    def remove_item(self, key: str):
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)
