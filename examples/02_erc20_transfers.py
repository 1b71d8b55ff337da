"""ERC-20 transfer example for the ERC-20 transfer API.

This example demonstrates:
- transfer(to, amount) from the signer's own balance
- transferFrom(owner, to, amount) against an allowance granted to the signer
- Error handling for transfer operations
"""

import os

from dotenv import load_dotenv

from erc20_api import ERC20Client, TokenClientConfig

load_dotenv()


def example_erc20_transfers():
    """Send tokens directly and on behalf of ALLOWANCE_OWNER."""

    recipient = os.getenv("RECIPIENT")
    if not recipient:
        raise ValueError("RECIPIENT not found in environment variables")

    client = ERC20Client.from_config(TokenClientConfig.from_env())

    transfer_response = client.erc20_send_to(recipient, "1.25")

    if transfer_response.success:
        print("✅ transfer sent!")
        print(f"   Tx hash: {transfer_response.transaction_hash}")
        print(f"   Units: {transfer_response.amount_units}")
    else:
        print(f"❌ transfer failed: {transfer_response.error}")

    owner = os.getenv("ALLOWANCE_OWNER")
    if owner:
        transfer_from_response = client.erc20_send_from(owner, recipient, "0.5")

        if transfer_from_response.success:
            print("✅ transferFrom sent!")
            print(f"   Tx hash: {transfer_from_response.transaction_hash}")
        else:
            # An insufficient allowance shows up here as a gas estimation revert
            print(f"❌ transferFrom failed: {transfer_from_response.error}")

    client.disconnect()


if __name__ == "__main__":
    example_erc20_transfers()
