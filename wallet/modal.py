from config import INFURA_PROJECT_ID, WALLET_RPC
from wallet.providers import walletconnect_provider

CACHED_PROVIDER_KEY = "WEB3_CONNECT_CACHED_PROVIDER"


def default_provider_options():
    return {
        "walletconnect": {
            "package": walletconnect_provider,
            "options": {
                "infura_id": INFURA_PROJECT_ID,
                "rpc": dict(WALLET_RPC),
                "chain_id": next(iter(WALLET_RPC)),
            },
        },
    }


class WalletModal:
    """Picks a wallet connector, opens it and remembers the choice."""

    def __init__(self, storage, provider_options=None, cache_provider: bool = True):
        self.storage = storage
        self.provider_options = provider_options if provider_options is not None else default_provider_options()
        self.cache_provider = cache_provider

    @property
    def cached_provider(self):
        if not self.cache_provider:
            return None
        return self.storage.get_item(CACHED_PROVIDER_KEY)

    def connect(self, name: str | None = None):
        name = name or self.cached_provider or next(iter(self.provider_options), None)
        if name not in self.provider_options:
            raise ValueError(f"Unknown wallet provider: {name}")

        option = self.provider_options[name]
        provider = option["package"](option.get("options", {}))
        if hasattr(provider, "enable"):
            provider.enable()

        if self.cache_provider:
            self.storage.set_item(CACHED_PROVIDER_KEY, name)
        return provider

    def clear_cached_provider(self):
        self.storage.remove_item(CACHED_PROVIDER_KEY)
