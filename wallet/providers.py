# wallet/providers.py

import itertools
from collections import defaultdict

import requests
from web3.providers import BaseProvider

from config import RPC_TIMEOUT

INFURA_URL = "https://{network}.infura.io/v3/{infura_id}"
INFURA_NETWORKS = {1: "mainnet", 5: "goerli", 10: "optimism-mainnet", 11155111: "sepolia"}


class ProviderRpcError(Exception):
    def __init__(self, code: int, message: str, data=None):
        super().__init__(message)
        self.code = code
        self.data = data


class EventEmitter:
    def __init__(self):
        self._listeners = defaultdict(list)

    def on(self, event: str, listener):
        self._listeners[event].append(listener)

    def remove_listener(self, event: str, listener):
        if listener in self._listeners[event]:
            self._listeners[event].remove(listener)

    def listener_count(self, event: str) -> int:
        return len(self._listeners[event])

    def emit(self, event: str, *args):
        # copy, listeners may detach themselves while firing
        for listener in list(self._listeners[event]):
            listener(*args)


class HttpRpcProvider(EventEmitter):
    """EIP-1193 style provider backed by a plain HTTP JSON-RPC endpoint."""

    def __init__(self, url: str, timeout: int = RPC_TIMEOUT, session: requests.Session | None = None):
        super().__init__()
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()
        self._ids = itertools.count(1)

    def request(self, args: dict):
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": args["method"],
            "params": list(args.get("params") or []),
        }
        response = self.session.post(self.url, json=payload, timeout=self.timeout)
        response.raise_for_status()
        data = response.json()
        if "error" in data:
            error = data["error"]
            raise ProviderRpcError(error.get("code", -32603), error.get("message", "RPC error"), error.get("data"))
        return data.get("result")

    def enable(self):
        return self.request({"method": "eth_accounts"})

    def close(self):
        self.session.close()


def walletconnect_provider(options: dict) -> HttpRpcProvider:
    chain_id = options.get("chain_id", 1)
    rpc = options.get("rpc", {})
    url = rpc.get(chain_id)
    if not url:
        infura_id = options.get("infura_id")
        if not infura_id or chain_id not in INFURA_NETWORKS:
            raise ValueError(f"No RPC configured for chain {chain_id}")
        url = INFURA_URL.format(network=INFURA_NETWORKS[chain_id], infura_id=infura_id)
    return HttpRpcProvider(url)


class Eip1193Provider(BaseProvider):
    """
    web3 provider forwarding every call to an EIP-1193 style provider.
    Not bound to a chain id, so the wrapped wallet can switch networks.
    """

    def __init__(self, provider):
        super().__init__()
        self.provider = provider
        self._ids = itertools.count(1)

    def make_request(self, method, params):
        request_id = next(self._ids)
        try:
            result = self.provider.request({"method": method, "params": list(params or [])})
        except ProviderRpcError as e:
            return {"jsonrpc": "2.0", "id": request_id, "error": {"code": e.code, "message": str(e)}}
        return {"jsonrpc": "2.0", "id": request_id, "result": result}

    def is_connected(self, show_traceback: bool = False) -> bool:
        return self.provider is not None
