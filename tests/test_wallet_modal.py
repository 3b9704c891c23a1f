import pytest
import requests

from wallet.modal import CACHED_PROVIDER_KEY, WalletModal, default_provider_options
from wallet.providers import HttpRpcProvider, ProviderRpcError, walletconnect_provider
from wallet.storage import LocalStorage


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.payload


class FakeSession:
    def __init__(self, responses):
        self.responses = list(responses)
        self.sent = []
        self.closed = False

    def post(self, url, json=None, timeout=None):
        self.sent.append((url, json))
        return self.responses.pop(0)

    def close(self):
        self.closed = True


class TestLocalStorage:

    def test_round_trip_and_remove(self, tmp_path):
        storage = LocalStorage(str(tmp_path / "nested" / "storage.json"))
        assert storage.get_item("walletconnect") is None

        storage.set_item("walletconnect", '{"connected": true}')
        assert LocalStorage(storage.path).get_item("walletconnect") == '{"connected": true}'

        storage.remove_item("walletconnect")
        assert storage.get_item("walletconnect") is None

    def test_remove_missing_key_is_noop(self, tmp_path):
        storage = LocalStorage(str(tmp_path / "storage.json"))
        storage.remove_item("walletconnect")
        assert storage.get_item("walletconnect") is None


class TestWalletModal:

    def test_connect_uses_named_option_and_caches(self, tmp_path):
        storage = LocalStorage(str(tmp_path / "storage.json"))
        seen = []
        modal = WalletModal(storage, provider_options={
            "a": {"package": lambda options: seen.append(("a", options)) or "provider-a", "options": {"x": 1}},
            "b": {"package": lambda options: "provider-b"},
        })

        assert modal.connect("a") == "provider-a"
        assert seen == [("a", {"x": 1})]
        assert modal.cached_provider == "a"

        modal.clear_cached_provider()
        assert modal.cached_provider is None

    def test_connect_prefers_cached_provider(self, tmp_path):
        storage = LocalStorage(str(tmp_path / "storage.json"))
        storage.set_item(CACHED_PROVIDER_KEY, "b")
        modal = WalletModal(storage, provider_options={
            "a": {"package": lambda options: "provider-a"},
            "b": {"package": lambda options: "provider-b"},
        })
        assert modal.connect() == "provider-b"

    def test_no_caching_when_disabled(self, tmp_path):
        storage = LocalStorage(str(tmp_path / "storage.json"))
        modal = WalletModal(storage, provider_options={"a": {"package": lambda options: "p"}}, cache_provider=False)
        modal.connect()
        assert storage.get_item(CACHED_PROVIDER_KEY) is None
        assert modal.cached_provider is None

    def test_unknown_provider(self, tmp_path):
        modal = WalletModal(LocalStorage(str(tmp_path / "s.json")), provider_options={})
        with pytest.raises(ValueError):
            modal.connect("metamask")

    def test_default_options_point_at_optimism(self):
        options = default_provider_options()["walletconnect"]["options"]
        assert options["rpc"][10] == "https://mainnet.optimism.io"
        assert options["rpc"][69] == "https://kovan.optimism.io/"


class TestHttpRpcProvider:

    def test_request_returns_result(self):
        session = FakeSession([FakeResponse({"jsonrpc": "2.0", "id": 1, "result": "0xa"})])
        provider = HttpRpcProvider("http://localhost:8545", session=session)

        assert provider.request({"method": "eth_chainId"}) == "0xa"
        url, payload = session.sent[0]
        assert url == "http://localhost:8545"
        assert payload["method"] == "eth_chainId"
        assert payload["params"] == []

    def test_rpc_error_raises(self):
        session = FakeSession([FakeResponse({"jsonrpc": "2.0", "id": 1, "error": {"code": 4001, "message": "rejected"}})])
        provider = HttpRpcProvider("http://localhost:8545", session=session)

        with pytest.raises(ProviderRpcError) as exc:
            provider.request({"method": "eth_requestAccounts"})
        assert exc.value.code == 4001

    def test_close_closes_session(self):
        session = FakeSession([])
        provider = HttpRpcProvider("http://localhost:8545", session=session)
        provider.close()
        assert session.closed

    def test_walletconnect_provider_picks_rpc_by_chain(self):
        provider = walletconnect_provider({"rpc": {69: "https://kovan.optimism.io/"}, "chain_id": 69})
        assert provider.url == "https://kovan.optimism.io/"

    def test_walletconnect_provider_falls_back_to_infura(self):
        provider = walletconnect_provider({"infura_id": "abc", "chain_id": 1})
        assert provider.url == "https://mainnet.infura.io/v3/abc"

    def test_walletconnect_provider_without_rpc(self):
        with pytest.raises(ValueError):
            walletconnect_provider({"chain_id": 1})
