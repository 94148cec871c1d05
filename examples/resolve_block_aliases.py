#!/usr/bin/env python3
"""
Example: Resolve the aliases of the transactions in a block

Streams the confirmed transactions of one block, then replaces every
namespace alias (recipient addresses, mosaic ids) with the value it resolved
to when the block was executed.

Usage:
    python resolve_block_aliases.py --endpoint testnet --height 1500
"""

import argparse
import logging
import sys

from symbol_client import (
    ClientConfig,
    NamespaceId,
    RepositoryFactoryHttp,
    SymbolError,
    TransactionPaginationStreamer,
    TransactionSearchCriteria,
    TransactionService,
)

logger = logging.getLogger("resolve_block_aliases")


def main():
    parser = argparse.ArgumentParser(description="Resolve the aliases of a block's transactions")
    parser.add_argument("--endpoint", default="testnet", help="Node URL or mainnet/testnet/local")
    parser.add_argument("--height", type=int, required=True, help="Block height")
    parser.add_argument("--limit", type=int, default=100, help="Maximum transactions to read")
    parser.add_argument("--debug", action="store_true", help="Log HTTP requests")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    config = ClientConfig(endpoint=args.endpoint, debug=args.debug)
    with RepositoryFactoryHttp(config) as factory:
        streamer = TransactionPaginationStreamer(factory.create_transaction_repository())
        service = TransactionService(factory.create_receipt_repository(),
                                     factory.create_transaction_repository())

        try:
            criteria = TransactionSearchCriteria(height=args.height, page_size=config.page_size)
            transactions = list(streamer.search(criteria, limit=args.limit))
            logger.info(f"Block {args.height}: {len(transactions)} transactions")

            for original, resolved in zip(transactions, service.resolve_aliases(transactions)):
                recipient = getattr(original, "recipient_address", None)
                if isinstance(recipient, NamespaceId):
                    logger.info(f"  {original.type.name}: {recipient!r} -> {resolved.recipient_address}")
                else:
                    logger.info(f"  {original.type.name}: no aliases")
        except SymbolError as e:
            logger.error(f"Failed: {e}")
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
