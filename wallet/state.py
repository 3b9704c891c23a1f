# wallet/state.py

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any, Optional


@dataclass(frozen=True)
class WalletState:
    address: Optional[str] = None
    balance: Optional[Decimal] = None
    chain_id: Optional[int] = None
    provider: Any = None
    web3: Any = None
    signer: Any = None


INITIAL_STATE = WalletState()


@dataclass(frozen=True)
class SetProvider:
    provider: Any
    web3: Any
    signer: Any
    address: str
    balance: Decimal
    chain_id: int


@dataclass(frozen=True)
class SetBalance:
    balance: Decimal


@dataclass(frozen=True)
class SetAddress:
    address: str
    balance: Decimal


@dataclass(frozen=True)
class ResetProvider:
    pass


class UnhandledActionError(Exception):
    pass


def reducer(state: WalletState, action) -> WalletState:
    match action:
        case SetProvider():
            if not action.address:
                raise ValueError("SetProvider requires an address")
            return replace(
                state,
                provider=action.provider,
                web3=action.web3,
                signer=action.signer,
                address=action.address,
                balance=action.balance,
                chain_id=action.chain_id,
            )
        case SetBalance():
            return replace(state, balance=action.balance)
        case SetAddress():
            if state.provider is not None and not action.address:
                raise ValueError("SetAddress requires an address while a provider is set")
            return replace(state, address=action.address, balance=action.balance)
        case ResetProvider():
            return INITIAL_STATE
        case _:
            raise UnhandledActionError(f"Unhandled action type: {type(action).__name__}")
