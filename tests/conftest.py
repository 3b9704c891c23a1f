"""
Shared fakes for keeper and wallet tests.
"""
import json

import pytest

from keeper.processor import KeeperContext
from wallet.providers import EventEmitter, ProviderRpcError


class FakeTransaction:
    def __init__(self):
        self.waited = False

    def wait(self):
        self.waited = True
        return {"status": 1}


class FakeEthernauts:
    def __init__(self, random_number=0):
        self.random_number = random_number
        self.base_uris = []
        self.transactions = []

    def get_random_number_for_batch(self, batch_number):
        return self.random_number

    def set_base_uri(self, base_uri):
        self.base_uris.append(base_uri)
        tx = FakeTransaction()
        self.transactions.append(tx)
        return tx


class FakeQueue:
    def __init__(self):
        self.jobs = []

    def add(self, job):
        self.jobs.append(job)
        return job


class FakeFleek:
    def __init__(self, folder_hash="QmFolder", fail_on=None):
        self.folder_hash = folder_hash
        self.fail_on = fail_on
        self.existing = set()
        self.uploads = []

    def get_folder_hash(self, folder):
        return self.folder_hash

    def file_exists(self, key):
        return key in self.existing

    def upload_file(self, key, location):
        if self.fail_on and key.endswith(self.fail_on):
            raise RuntimeError(f"upload failed for {key}")
        self.uploads.append((key, location))
        self.existing.add(key)
        return {"key": key, "hash": f"Qm{len(self.uploads)}"}


class FakeWallet(EventEmitter):
    """EIP-1193 wallet answering the handful of RPC calls a session makes."""

    def __init__(self, accounts=None, balances=None, chain_id=10, reject=False):
        super().__init__()
        self.accounts = accounts if accounts is not None else ["0x" + "ab" * 20]
        self.balances = balances or {}
        self.chain_id = chain_id
        self.reject = reject
        self.closed = False

    def enable(self):
        if self.reject:
            raise ProviderRpcError(4001, "User rejected the request.")
        return self.accounts

    def request(self, args):
        method = args["method"]
        params = args.get("params") or []
        if method == "eth_accounts":
            return self.accounts
        if method == "eth_chainId":
            return hex(self.chain_id)
        if method == "eth_getBalance":
            return hex(self.balances.get(params[0].lower(), 0))
        raise ProviderRpcError(-32601, f"Method {method} not supported")

    def close(self):
        self.closed = True


@pytest.fixture
def resources(tmp_path):
    metadata_folder = tmp_path / "metadata"
    assets_folder = tmp_path / "assets"
    metadata_folder.mkdir()
    assets_folder.mkdir()
    for asset_id in range(10):
        (metadata_folder / f"{asset_id}.json").write_text(json.dumps({
            "description": f"asset {asset_id}",
            "image": f"{asset_id}.png",
        }))
        (assets_folder / f"{asset_id}.png").write_bytes(b"\x89PNG" + bytes([asset_id]))
    return metadata_folder, assets_folder


@pytest.fixture
def ctx(resources):
    metadata_folder, assets_folder = resources
    return KeeperContext(
        ethernauts=FakeEthernauts(),
        queue=FakeQueue(),
        fleek=FakeFleek(),
        metadata_folder=str(metadata_folder),
        assets_folder=str(assets_folder),
    )
