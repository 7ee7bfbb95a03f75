import os
from dotenv import load_dotenv
from pathlib import Path
import bittensor as bt

env_path = Path(__file__).parents[1] / '.env'
load_dotenv(dotenv_path=env_path)

# Cache Configuration
CACHE_ROOT = Path(os.getenv('POKTCALC_CACHE_ROOT', Path(__file__).resolve().parents[2] / "cache"))
CACHE_DIRS = {
    "block_times": os.path.join(CACHE_ROOT, "block_times"),
    "params": os.path.join(CACHE_ROOT, "params"),
}

# Cache expiry times (in seconds)
PARAMS_CACHE_EXPIRY = 24 * 60 * 60  # 1 day

# optional
DISABLE_PROVIDER_CACHING = os.getenv('DISABLE_PROVIDER_CACHING', 'False').lower() == 'true'

# rpc
POCKET_RPC_URL = os.getenv('POCKET_RPC_URL', 'http://localhost:8081')
RPC_TIMEOUT = int(os.getenv('RPC_TIMEOUT', '30'))  # seconds
RPC_MAX_RETRY = int(os.getenv('RPC_MAX_RETRY', '3'))

# protocol
REWARD_SCALING_ACTIVATION_HEIGHT = 69243
POKT_DENOMINATION = 1000000  # uPOKT per POKT
PIP22_EXPONENT_DENOMINATOR = 100

# pagination
ACCOUNT_TXS_PAGE_SIZE = int(os.getenv('ACCOUNT_TXS_PAGE_SIZE', '1000'))
HISTORY_PAGE_SIZE = int(os.getenv('HISTORY_PAGE_SIZE', '10000'))
HISTORY_SORT = "desc"

# Log out all non-sensitive config variables
bt.logging.info(f"POCKET_RPC_URL: {POCKET_RPC_URL}")
bt.logging.info(f"RPC_TIMEOUT: {RPC_TIMEOUT}")
bt.logging.info(f"RPC_MAX_RETRY: {RPC_MAX_RETRY}")
bt.logging.info(f"DISABLE_PROVIDER_CACHING: {DISABLE_PROVIDER_CACHING}")
bt.logging.info(f"REWARD_SCALING_ACTIVATION_HEIGHT: {REWARD_SCALING_ACTIVATION_HEIGHT}")
bt.logging.info(f"ACCOUNT_TXS_PAGE_SIZE: {ACCOUNT_TXS_PAGE_SIZE}")
bt.logging.info(f"HISTORY_PAGE_SIZE: {HISTORY_PAGE_SIZE}")
