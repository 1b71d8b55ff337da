"""Native coin transfer example for the ERC-20 transfer API.

This example demonstrates:
- Building a client from ERC20_* environment variables
- Sending native coin with the fixed 21000 gas limit
"""

import os

from dotenv import load_dotenv

from erc20_api import ERC20Client, TokenClientConfig

load_dotenv()


def example_native_transfer():
    """Send a small amount of native coin to RECIPIENT."""

    recipient = os.getenv("RECIPIENT")
    if not recipient:
        raise ValueError("RECIPIENT not found in environment variables")

    client = ERC20Client.from_config(TokenClientConfig.from_env())
    print(f"Sender: {client.sender_address} on chain {client.chain_id}")

    response = client.send_to(recipient, 0.001)

    if response.success:
        print("✅ Native transfer sent!")
        print(f"   Tx hash: {response.transaction_hash}")
        print(f"   Wei: {response.amount_units}")
    else:
        print(f"❌ Native transfer failed: {response.error}")

    client.disconnect()


if __name__ == "__main__":
    example_native_transfer()
