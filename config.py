import os
from dotenv import load_dotenv

load_dotenv()

# Networks the keeper can talk to
NETWORKS = {
    "local": "http://localhost:8545",
    "docker": "http://hardhat-node:8545",
}
NETWORK = os.getenv("NETWORK", "local")
RPC = os.getenv("RPC", NETWORKS.get(NETWORK, NETWORKS["local"]))
PROXY = os.getenv("PROXY") or None           # "ip:port:user:pass" or full http:// url
RPC_TIMEOUT = 15

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
PRIVATE_KEY_FILE = os.getenv("PRIVATE_KEY_FILE", os.path.join(BASE_DIR, "private_keys.txt"))

# Ethernauts contract
ETHERNAUTS_ADDRESS = os.getenv("ETHERNAUTS_ADDRESS", "0x5FbDB2315678afecb367f032d93F642f64180aa3")

# Queue
MINTS_QUEUE_NAME = os.getenv("MINTS_QUEUE_NAME", "mints")
RETRIES_PER_ACTION = 3                  # attempts per job before it is marked failed
DELAY_BETWEEN_RETRIES = (5, 10)         # pause between attempts, sec (from, to)

# Fleek storage
FLEEK_API_URL = os.getenv("FLEEK_API_URL", "https://storageapi.fleek.co")
FLEEK_API_KEY = os.getenv("FLEEK_API_KEY", "")
FLEEK_API_SECRET = os.getenv("FLEEK_API_SECRET", "")
FLEEK_BUCKET = os.getenv("FLEEK_BUCKET", f"{FLEEK_API_KEY}-bucket")
FLEEK_METADATA_FOLDER = os.getenv("FLEEK_METADATA_FOLDER", "metadata")
FLEEK_ASSETS_FOLDER = os.getenv("FLEEK_ASSETS_FOLDER", "assets")
FLEEK_TIMEOUT = 60

# Local resources
RESOURCES_FOLDER = os.getenv("RESOURCES_FOLDER", os.path.join(BASE_DIR, "resources"))
RESOURCES_METADATA_FOLDER = os.path.join(RESOURCES_FOLDER, "metadata")
RESOURCES_ASSETS_FOLDER = os.path.join(RESOURCES_FOLDER, "assets")

TOKEN_NAME_TEMPLATE = "EthernautDAO #{token_id}"
EXTERNAL_URL_TEMPLATE = "https://mint.ethernautdao.io/nft/{token_id}"

# Wallet session
INFURA_PROJECT_ID = os.getenv("INFURA_PROJECT_ID", "")
WALLET_RPC = {
    10: "https://mainnet.optimism.io",
    69: "https://kovan.optimism.io/",
}
WALLET_STORAGE_FILE = os.getenv("WALLET_STORAGE_FILE", os.path.join(BASE_DIR, "data", "wallet_storage.json"))
