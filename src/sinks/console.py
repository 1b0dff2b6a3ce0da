import json
import sys
from typing import TextIO

from src.models.common import CepLookupResult


class ConsoleSink:
    """Sink that prints a labelled, human-readable lookup result."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def __call__(self, result: CepLookupResult) -> None:
        # Resolve stdout at call time so redirected/captured streams are honoured.
        stream = self._stream or sys.stdout
        print(f"Endereço do CEP {result.cep}:", file=stream)  # noqa: T201
        print(json.dumps(result.as_payload(), ensure_ascii=False, indent=2), file=stream)  # noqa: T201
