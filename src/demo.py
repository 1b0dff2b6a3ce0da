"""Walk through the three ways of calling a CEP lookup with a callback.

1. No sink: the lookup runs and its result is simply discarded.
2. A console sink: the address is printed as soon as it arrives.
3. A file sink: the address is saved to ``response.json``.

The lookups are started together, so the order in which their sinks fire
depends on network and disk timing. Await each lookup (and the file sink's
``drain()``) when a fixed order is required.
"""

import asyncio
from pathlib import Path

from src import settings
from src.clients.viacep_client import ViaCepClient
from src.errors import CepProviderError
from src.logger import logger
from src.models.common import CepSink
from src.sinks.console import ConsoleSink
from src.sinks.file import FileSink

DEMO_CEP = "02266001"


async def _run_lookup(client: ViaCepClient, label: str, sink: CepSink | None = None) -> None:
    try:
        await client.lookup_cep(DEMO_CEP, sink)
    except CepProviderError as exc:
        logger.error(f"Lookup failed scenario={label} cep={DEMO_CEP} error={exc}")
    else:
        logger.info(f"Lookup finished scenario={label} cep={DEMO_CEP}")


async def run_demo(output_dir: Path | None = None, client: ViaCepClient | None = None) -> FileSink:
    """Run all three scenarios and wait for the file write to settle."""
    client = client or ViaCepClient()
    file_sink = FileSink(output_dir or settings.OUTPUT_DIR)

    await asyncio.gather(
        _run_lookup(client, "no-sink"),
        _run_lookup(client, "console", ConsoleSink()),
        _run_lookup(client, "file", file_sink),
    )
    await file_sink.drain()
    return file_sink


def main() -> None:
    asyncio.run(run_demo())


if __name__ == "__main__":
    main()
