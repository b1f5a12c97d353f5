import argparse
import asyncio
import logging
import sys

from de1link.fake_app import FakeDe1, SimulatorSettings, create_logger, get_settings
from de1link.transports.stream import StreamSink, StreamSource


class FakeServer:
    """Serve one :class:`FakeDe1` per TCP connection."""

    def __init__(self, settings: SimulatorSettings) -> None:
        self.settings = settings
        self.logger = create_logger("de1link.fake", self.settings.log_ring_size)

    async def handle_connection(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        peer = writer.get_extra_info("peername")
        self.logger.info("connection_open", extra={"details": {"peer": str(peer)}})
        device = FakeDe1(StreamSource(reader), StreamSink(writer), settings=self.settings, logger=self.logger)
        try:
            await device.run()
        except ConnectionError as exc:
            self.logger.warning("connection_lost", extra={"details": {"peer": str(peer), "error": str(exc)}})
        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except ConnectionError:
                pass
            self.logger.info(
                "connection_closed",
                extra={"details": {"peer": str(peer), "recent_errors": len(device.recent_errors())}},
            )

    async def serve(self) -> None:
        server = await asyncio.start_server(self.handle_connection, self.settings.host, self.settings.port)
        self.logger.info("listening", extra={"details": {"host": self.settings.host, "port": self.settings.port}})
        async with server:
            await server.serve_forever()

    def start(self) -> None:
        asyncio.run(self.serve())


def main():
    defaults = get_settings()
    parser = argparse.ArgumentParser(description="Run a fake DE1 controller over TCP.")
    parser.add_argument("--host", type=str, default=defaults.host, help="Address to bind the fake controller to.")
    parser.add_argument("--port", type=int, default=defaults.port, help="Port to listen on.")
    parser.add_argument("--tick", type=float, default=defaults.tick_period, help="Seconds between telemetry ticks.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every tick.")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    settings = defaults.model_copy(update={"host": args.host, "port": args.port, "tick_period": args.tick})
    server = FakeServer(settings)
    if args.verbose:
        server.logger.setLevel(logging.DEBUG)
    try:
        server.start()
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
