import io
import json
import logging
from pathlib import Path

import pytest

from src.models.common import CepLookupResult
from src.sinks.console import ConsoleSink
from src.sinks.file import FileSink, FileWriteResult
from tests.common import VIACEP_PAYLOAD


def _result() -> CepLookupResult:
    return CepLookupResult.model_validate(VIACEP_PAYLOAD)


def test_console_sink_prints_label_and_payload() -> None:
    stream = io.StringIO()

    ConsoleSink(stream)(_result())

    output = stream.getvalue()
    assert output.startswith("Endereço do CEP 02266-001:\n")
    assert json.loads(output.split("\n", 1)[1]) == VIACEP_PAYLOAD


def test_console_sink_defaults_to_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    ConsoleSink()(_result())

    assert "02266-001" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_file_sink_write_round_trips_payload(tmp_path: Path) -> None:
    outcomes: list[tuple] = []
    sink = FileSink(tmp_path, on_complete=lambda err, meta: outcomes.append((err, meta)))

    meta = await sink.write(_result())

    target = tmp_path / "response.json"
    assert json.loads(target.read_text(encoding="utf-8")) == VIACEP_PAYLOAD
    assert isinstance(meta, FileWriteResult)
    assert meta.path == target
    assert meta.bytes_written == len(target.read_bytes())
    assert outcomes == [(None, meta)]


@pytest.mark.asyncio
async def test_file_sink_call_schedules_write_without_blocking(tmp_path: Path) -> None:
    sink = FileSink(tmp_path)

    returned = sink(_result())

    # The write only starts once the loop gets a chance to run the task.
    assert sink.pending == 1
    assert not (tmp_path / "response.json").exists()
    await sink.drain()
    assert returned.done()
    assert sink.pending == 0
    assert json.loads((tmp_path / "response.json").read_text(encoding="utf-8")) == VIACEP_PAYLOAD


@pytest.mark.asyncio
async def test_file_sink_overwrites_existing_file(tmp_path: Path) -> None:
    target = tmp_path / "response.json"
    target.write_text('{"old": "content"}')

    await FileSink(tmp_path).write(_result())

    assert json.loads(target.read_text(encoding="utf-8")) == VIACEP_PAYLOAD


@pytest.mark.asyncio
async def test_file_sink_default_callback_prints_saved_path(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    await FileSink(tmp_path).write(_result())

    assert f"Arquivo salvo com sucesso em: {tmp_path / 'response.json'}" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_file_sink_reports_unwritable_target(tmp_path: Path) -> None:
    """A failed write goes to the completion callback instead of raising."""
    outcomes: list[tuple] = []
    missing_dir = tmp_path / "does-not-exist"
    sink = FileSink(missing_dir, on_complete=lambda err, meta: outcomes.append((err, meta)))

    sink(_result())
    await sink.drain()

    assert len(outcomes) == 1
    error, meta = outcomes[0]
    assert isinstance(error, OSError)
    assert meta is None
    assert not (missing_dir / "response.json").exists()


@pytest.mark.asyncio
async def test_file_sink_default_callback_logs_write_failure(
    tmp_path: Path, cep_caplog: pytest.LogCaptureFixture
) -> None:
    # A directory in place of the target file makes the write fail regardless of privileges.
    (tmp_path / "response.json").mkdir()

    with cep_caplog.at_level(logging.ERROR, logger="cep"):
        meta = await FileSink(tmp_path).write(_result())

    assert meta is None
    assert "Failed to save lookup result" in cep_caplog.text


@pytest.mark.asyncio
async def test_file_sink_writes_xml_text_as_is(tmp_path: Path) -> None:
    document = "<xmlcep><cep>02266-001</cep></xmlcep>"

    await FileSink(tmp_path, "response.xml").write(document)

    assert (tmp_path / "response.xml").read_text(encoding="utf-8") == document


@pytest.mark.asyncio
async def test_file_sink_concurrent_writers_leave_valid_json(tmp_path: Path) -> None:
    """Sinks sharing a target never leave a mixed file behind, whatever their payload sizes."""
    short = CepLookupResult.model_validate({"cep": "01001-000"})
    long = _result()
    sinks = [FileSink(tmp_path) for _ in range(20)]

    for index, sink in enumerate(sinks):
        sink(long if index % 2 else short)
    for sink in sinks:
        await sink.drain()

    written = json.loads((tmp_path / "response.json").read_text(encoding="utf-8"))
    assert written in (short.as_payload(), long.as_payload())
    assert [p.name for p in tmp_path.iterdir()] == ["response.json"]


@pytest.mark.asyncio
async def test_file_sink_failed_write_leaves_no_temp_file(tmp_path: Path) -> None:
    (tmp_path / "response.json").mkdir()

    meta = await FileSink(tmp_path, on_complete=lambda err, meta: None).write(_result())

    assert meta is None
    assert [p.name for p in tmp_path.iterdir()] == ["response.json"]
