# keeper/contract.py

from web3 import Web3, HTTPProvider
from eth_account import Account
from eth_account.signers.local import LocalAccount

from config import RPC, PROXY, RPC_TIMEOUT, ETHERNAUTS_ADDRESS
from keeper.account_loader import load_private_key

ETHERNAUTS_ABI = [
    {
        "inputs": [{"internalType": "uint256", "name": "batchNumber", "type": "uint256"}],
        "name": "getRandomNumberForBatch",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"internalType": "string", "name": "baseURI_", "type": "string"}],
        "name": "setBaseURI",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]


class TransactionFailed(Exception):
    pass


def parse_proxy(proxy: str | None) -> str | None:
    if not proxy:
        return None
    if proxy.startswith("http://") or proxy.startswith("https://"):
        return proxy.strip()
    host, port, username, password = proxy.strip().split(":")
    return f"http://{username}:{password}@{host}:{port}"


def create_web3_with_proxy(rpc: str = RPC, proxy: str | None = PROXY) -> Web3:
    request_kwargs = {"timeout": RPC_TIMEOUT}
    proxy_url = parse_proxy(proxy)
    if proxy_url:
        request_kwargs["proxies"] = {"http": proxy_url, "https": proxy_url}
    return Web3(HTTPProvider(rpc, request_kwargs=request_kwargs))


class PendingTransaction:
    def __init__(self, w3: Web3, tx_hash):
        self.w3 = w3
        self.hash = tx_hash

    def wait(self, timeout: int = 120):
        receipt = self.w3.eth.wait_for_transaction_receipt(self.hash, timeout=timeout)
        if receipt["status"] != 1:
            raise TransactionFailed(f"Transaction reverted: {self.w3.to_hex(self.hash)}")
        print(f"[Tx ✅] {self.w3.to_hex(self.hash)} confirmed in block {receipt['blockNumber']}")
        return receipt


class EthernautsContract:
    """Read/write handle over the two Ethernauts functions the keeper needs."""

    def __init__(self, w3: Web3, account: LocalAccount, address: str = ETHERNAUTS_ADDRESS):
        self.w3 = w3
        self.account = account
        self.contract = w3.eth.contract(address=Web3.to_checksum_address(address), abi=ETHERNAUTS_ABI)

    def get_random_number_for_batch(self, batch_number: int) -> int:
        return self.contract.functions.getRandomNumberForBatch(batch_number).call()

    def set_base_uri(self, base_uri: str) -> PendingTransaction:
        nonce = self.w3.eth.get_transaction_count(self.account.address, "pending")
        tx = self.contract.functions.setBaseURI(base_uri).build_transaction({
            "from": self.account.address,
            "nonce": nonce,
            "chainId": self.w3.eth.chain_id,
        })

        signed_tx = self.w3.eth.account.sign_transaction(tx, self.account.key)
        tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
        print(f"[Tx 🚀] setBaseURI({base_uri}) → {self.w3.to_hex(tx_hash)}")
        return PendingTransaction(self.w3, tx_hash)


def load_ethernauts(rpc: str = RPC, proxy: str | None = PROXY) -> EthernautsContract:
    w3 = create_web3_with_proxy(rpc, proxy)
    account = Account.from_key(load_private_key())
    return EthernautsContract(w3, account)
