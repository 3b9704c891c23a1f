# keeper/fleek.py

import os
import requests

from config import (
    FLEEK_API_URL,
    FLEEK_API_KEY,
    FLEEK_API_SECRET,
    FLEEK_BUCKET,
    FLEEK_TIMEOUT,
)

HASH_HEADER = "x-fleek-ipfs-hash"


class FleekClient:
    """Thin client over the Fleek storage HTTP API.

    Objects live under ``<api_url>/<bucket>/<key>``; the IPFS hash of an
    object or folder comes back in the ``x-fleek-ipfs-hash`` header.
    """

    def __init__(self, api_url: str = FLEEK_API_URL, api_key: str = FLEEK_API_KEY,
                 api_secret: str = FLEEK_API_SECRET, bucket: str = FLEEK_BUCKET,
                 timeout: int = FLEEK_TIMEOUT, session: requests.Session | None = None):
        self.api_url = api_url.rstrip("/")
        self.bucket = bucket
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "accept": "application/json",
            "x-api-key": api_key,
            "x-api-secret": api_secret,
        })

    def _url(self, key: str) -> str:
        return f"{self.api_url}/{self.bucket}/{key.lstrip('/')}"

    def get_folder_hash(self, folder: str) -> str:
        response = self.session.head(self._url(folder.rstrip("/") + "/"), timeout=self.timeout)
        response.raise_for_status()
        folder_hash = response.headers.get(HASH_HEADER)
        if not folder_hash:
            raise RuntimeError(f"Fleek response for folder '{folder}' has no IPFS hash")
        return folder_hash

    def file_exists(self, key: str) -> bool:
        response = self.session.head(self._url(key), timeout=self.timeout)
        if response.status_code == 404:
            return False
        response.raise_for_status()
        return True

    def upload_file(self, key: str, location: str) -> dict:
        with open(location, "rb") as f:
            response = self.session.put(self._url(key), data=f, timeout=self.timeout)
        response.raise_for_status()

        return {
            "key": key,
            "bucket": self.bucket,
            "hash": response.headers.get(HASH_HEADER),
            "public_url": self._url(key),
            "size": os.path.getsize(location),
        }
