# wallet/session.py

from decimal import Decimal

from web3 import Web3

from wallet.providers import Eip1193Provider
from wallet.state import (
    INITIAL_STATE,
    WalletState,
    SetProvider,
    SetBalance,
    SetAddress,
    ResetProvider,
    reducer,
)

WALLETCONNECT_STORAGE_KEY = "walletconnect"


def default_web3_factory(provider) -> Web3:
    return Web3(Eip1193Provider(provider))


def get_balance(w3: Web3, address: str) -> Decimal:
    balance_wei = w3.eth.get_balance(Web3.to_checksum_address(address))
    return Decimal(Web3.from_wei(balance_wei, "ether"))


class Signer:
    """Account handle of the connected wallet; signing happens in the wallet."""

    def __init__(self, w3: Web3, index: int = 0):
        self.w3 = w3
        self.index = index

    def get_address(self) -> str:
        accounts = self.w3.eth.accounts
        if len(accounts) <= self.index:
            raise ValueError("Wallet exposes no account")
        return accounts[self.index]


class ProviderSubscription:
    def __init__(self, provider, listeners: dict):
        self.provider = provider
        self.listeners = listeners
        for event, listener in listeners.items():
            provider.on(event, listener)

    def release(self):
        if self.provider is None:
            return
        if hasattr(self.provider, "remove_listener"):
            for event, listener in self.listeners.items():
                self.provider.remove_listener(event, listener)
        self.provider = None


class WalletSession:
    """
    Connection state of one wallet for the lifetime of the application.

    Every state change goes through ``dispatch``; whenever the provider
    reference changes the listeners of the old provider are released and
    new ones attached.
    """

    def __init__(self, modal, storage, web3_factory=default_web3_factory, reload=None):
        self.modal = modal
        self.storage = storage
        self.web3_factory = web3_factory
        self.reload = reload or self._reload
        self.state: WalletState = INITIAL_STATE
        self._subscription: ProviderSubscription | None = None

    def dispatch(self, action) -> WalletState:
        previous_provider = self.state.provider
        self.state = reducer(self.state, action)
        if self.state.provider is not previous_provider:
            self._resubscribe()
        return self.state

    def connect(self) -> WalletState:
        provider = self.modal.connect()
        w3 = self.web3_factory(provider)

        signer = Signer(w3)
        address = signer.get_address()
        balance = get_balance(w3, address)
        chain_id = w3.eth.chain_id

        print(f"[Wallet ✅] Connected {address} on chain {chain_id}")
        return self.dispatch(SetProvider(
            provider=provider,
            web3=w3,
            signer=signer,
            address=address,
            balance=balance,
            chain_id=chain_id,
        ))

    def disconnect(self) -> WalletState:
        provider = self.state.provider
        if provider is not None and hasattr(provider, "close"):
            provider.close()
        self.modal.clear_cached_provider()
        self.storage.remove_item(WALLETCONNECT_STORAGE_KEY)

        return self.dispatch(ResetProvider())

    def refresh_balance(self) -> WalletState:
        if self.state.web3 is None:
            return self.state
        balance = get_balance(self.state.web3, self.state.address)
        return self.dispatch(SetBalance(balance=balance))

    def mount(self):
        if self.modal.cached_provider:
            self.connect()

    def unmount(self):
        self._release()

    def _reload(self):
        self.unmount()
        provider = self.state.provider
        if provider is not None and hasattr(provider, "close"):
            provider.close()
        self.dispatch(ResetProvider())
        self.mount()

    def _release(self):
        if self._subscription is not None:
            self._subscription.release()
            self._subscription = None

    def _resubscribe(self):
        self._release()
        provider = self.state.provider
        if provider is not None and hasattr(provider, "on"):
            self._subscription = ProviderSubscription(provider, {
                "accountsChanged": self._handle_accounts_changed,
                "chainChanged": self._handle_chain_changed,
                "disconnect": self._handle_disconnect,
            })

    def _handle_accounts_changed(self, accounts):
        # empty list: wallet locked
        if not accounts:
            self.disconnect()
            return

        address = Web3.to_checksum_address(accounts[0])
        balance = get_balance(self.state.web3, address)
        self.dispatch(SetAddress(address=address, balance=balance))

    def _handle_chain_changed(self, *_):
        self.reload()

    def _handle_disconnect(self, error=None):
        print(f"[Wallet ❌] disconnect {error}")
        self.disconnect()
