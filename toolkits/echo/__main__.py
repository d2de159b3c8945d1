"""Entry point: python -m toolkits.echo"""

import asyncio
import logging
import os
import signal

from unifai.toolkit import ToolkitInfo, ToolkitService

from toolkits.echo.action import EchoSlam


async def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    api_key = os.environ.get("UNIFAI_TOOLKIT_API_KEY")
    if not api_key:
        raise SystemExit("UNIFAI_TOOLKIT_API_KEY not set")

    service = ToolkitService(api_key)
    await service.update_info(
        ToolkitInfo(name="Echo Slam", description="What's in, what's out.")
    )
    service.add_action(EchoSlam())

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop.set)

    runner = await service.start()
    logging.info("Echo toolkit running — press Ctrl+C to stop")

    # Stop on signal, or when the platform closes the connection.
    stopper = asyncio.create_task(stop.wait())
    await asyncio.wait({runner, stopper}, return_when=asyncio.FIRST_COMPLETED)
    stopper.cancel()
    await service.stop()


if __name__ == "__main__":
    asyncio.run(main())
