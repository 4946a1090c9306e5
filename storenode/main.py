"""Entry point for the store node service.
Starts the RPC server that answers content-addressed put/get requests.
"""

import asyncio
import signal
import sys

from common.logging_config import setup_logging
from storenode.blob_storage import ensure_blobs_directory, list_all_blobs, BLOBS_DIR
from storenode.config import STORENODE_HOST, STORENODE_PORT, SHUTDOWN_GRACE_SECONDS
from storenode.grpc_server import create_server

logger = setup_logging('storenode')


async def serve() -> None:
    """Start and run gRPC server until terminated."""
    server = create_server()
    listen_addr = f'{STORENODE_HOST}:{STORENODE_PORT}'
    server.add_insecure_port(listen_addr)

    logger.info(f"Starting store node on {listen_addr}")
    await server.start()

    async def shutdown(sig=None):
        if sig:
            logger.info(f"Received signal {sig}, shutting down...")
        else:
            logger.info("Shutting down...")
        await server.stop(SHUTDOWN_GRACE_SECONDS)
        logger.info("Store node stopped")

    if sys.platform != 'win32':
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(sig, lambda s=sig: asyncio.create_task(shutdown(s)))

    await server.wait_for_termination()


def main() -> None:
    """Bootstrap store node service."""
    logger.info("Initializing store node...")
    ensure_blobs_directory()
    logger.info(f"Serving {len(list_all_blobs())} blobs from {BLOBS_DIR}")

    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, store node shutdown complete")
    except Exception as e:
        logger.error(f"Server error: {e}", exc_info=True)
        raise


if __name__ == "__main__":
    main()
