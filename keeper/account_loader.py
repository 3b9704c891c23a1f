import os
from typing import List

from config import PRIVATE_KEY_FILE


def load_private_keys(path: str = PRIVATE_KEY_FILE) -> List[str]:
    with open(path, "r") as f:
        return [line.strip() for line in f if line.strip() and not line.startswith("#")]


def load_private_key(path: str = PRIVATE_KEY_FILE) -> str:
    # PRIVATE_KEY in the environment wins over the keys file
    env_key = os.getenv("PRIVATE_KEY")
    if env_key:
        return env_key.strip().replace('"', "")

    keys = load_private_keys(path)
    if not keys:
        raise ValueError(f"No private key found in {path}")
    return keys[0]
