import os
import sys
import toml

from cosmos_type_registry import build_registry
from cosmos_type_registry.codec import format_tx_messages
from cosmos_type_registry.rpc import fetch_tx_bytes

if len(sys.argv) != 4:
    raise Exception(
        "Usage: decode_tx.py <chain> <mainnet|testnet> <tx_hash>"
    )

CHAIN = sys.argv[1]
NETWORK = sys.argv[2]
TX_HASH = sys.argv[3]

# Match the CHAIN to the file name in the configs folder
found_config = False
for file in os.listdir("configs"):
    if file == f"{CHAIN}.toml":
        config = toml.load(f"configs/{file}")
        found_config = True
        break

# Raise exception if config not found
if not found_config:
    raise Exception(
        f"Could not find config for chain {CHAIN}; Must enter a chain as 1st cli arg."
    )

# Choose network based on cli args
if NETWORK == "mainnet":
    RPC_URL = config["MAINNET_RPC_URL"]
elif NETWORK == "testnet":
    RPC_URL = config["TESTNET_RPC_URL"]
else:
    raise Exception(
        "Must specify either 'mainnet' or 'testnet' for 2nd cli arg."
    )

# Bundled registry tables to load; all of them when not set
REGISTRY_TABLES = config.get("REGISTRY_TABLES")


def main():
    registry = build_registry(REGISTRY_TABLES)
    print("Loaded registry with", len(registry), "types")

    tx_bytes = fetch_tx_bytes(RPC_URL, TX_HASH)
    print("Tx hash: ", TX_HASH, " size: ", len(tx_bytes), " bytes")

    for line in format_tx_messages(tx_bytes, registry):
        print(line)


if __name__ == "__main__":
    main()
