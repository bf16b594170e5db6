from __future__ import annotations

import io
import wave

import numpy as np
import pytest

from robot_head.config import env
from robot_head.protocol import MessageKind
from robot_head.client.console import console_sink
from robot_head.config.secrets import resolve_secret, read_key_file
from robot_head.state.settings import SampleFormat
from robot_head.client.inputs import stdin_lines, microphone_chunks
from robot_head.client.network import ws_url, build_url
from robot_head.client.audio_decode import decode_audio, parse_mime_type
from robot_head.handlers.websocket.auth import validate_api_key

# --- env / secrets ---


def test_env_helpers_fall_back_on_bad_values(monkeypatch) -> None:
    monkeypatch.setenv("RH_TEST_FLOAT", "abc")
    monkeypatch.setenv("RH_TEST_INT", "-3")
    monkeypatch.setenv("RH_TEST_BOOL", "off")
    assert env.get_float("RH_TEST_FLOAT", 2.5) == 2.5
    assert env.get_int("RH_TEST_INT", 7, minimum=1) == 7
    assert env.get_bool("RH_TEST_BOOL", True) is False
    assert env.get_str("RH_TEST_UNSET_VALUE", "fallback") == "fallback"


def test_secret_prefers_environment(monkeypatch, tmp_path) -> None:
    (tmp_path / ".api_keys").mkdir()
    (tmp_path / ".api_keys" / "openai_key").write_text("from-file\n", encoding="utf-8")
    monkeypatch.setenv("RH_TEST_OPENAI_KEY", "  from-env  ")
    assert resolve_secret("RH_TEST_OPENAI_KEY", "openai_key", home=tmp_path) == "from-env"


def test_secret_falls_back_to_key_file(monkeypatch, tmp_path) -> None:
    (tmp_path / ".api_keys").mkdir()
    (tmp_path / ".api_keys" / "elevenlabs_key").write_text("xi-from-file\n", encoding="utf-8")
    monkeypatch.delenv("RH_TEST_ELEVEN_KEY", raising=False)
    assert resolve_secret("RH_TEST_ELEVEN_KEY", "elevenlabs_key", home=tmp_path) == "xi-from-file"


def test_missing_key_file_is_empty(tmp_path) -> None:
    assert read_key_file("openai_key", home=tmp_path) == ""


# --- auth ---


def test_validate_api_key() -> None:
    assert validate_api_key("", "")
    assert validate_api_key("anything", "")
    assert validate_api_key("secret", "secret")
    assert not validate_api_key("", "secret")
    assert not validate_api_key("Secret", "secret")


# --- network ---


@pytest.mark.parametrize(
    "server,secure,expected",
    [
        ("localhost:9001", False, "ws://localhost:9001/ws"),
        ("robot.example.com", True, "wss://robot.example.com/ws"),
        ("https://robot.example.com", False, "wss://robot.example.com/ws"),
        ("http://10.0.0.5:9001/", False, "ws://10.0.0.5:9001/ws"),
        ("ws://localhost:9001/ws", False, "ws://localhost:9001/ws"),
        ("wss://proxy.example.com/robot", False, "wss://proxy.example.com/robot/ws"),
    ],
)
def test_ws_url(server: str, secure: bool, expected: str) -> None:
    assert ws_url(server, secure) == expected


def test_build_url_appends_api_key() -> None:
    assert build_url("localhost:9001") == "ws://localhost:9001/ws"
    assert build_url("localhost:9001", api_key="k 1") == "ws://localhost:9001/ws?api_key=k+1"


# --- audio decode ---


def test_parse_mime_type_parameters() -> None:
    assert parse_mime_type("audio/PCM; rate=24000; channels=2") == ("audio/pcm", {"rate": "24000", "channels": "2"})


def test_decode_pcm_uses_mime_parameters() -> None:
    pcm = np.arange(8, dtype="<i2").tobytes()
    samples, rate = decode_audio(pcm, "audio/pcm;rate=24000;channels=2")
    assert rate == 24000
    assert samples.shape == (4, 2)


def test_decode_pcm_defaults_to_configured_format() -> None:
    pcm = np.arange(6, dtype="<i2").tobytes()
    samples, rate = decode_audio(pcm, "audio/pcm", pcm_format=SampleFormat(sample_rate_hz=22050))
    assert rate == 22050
    assert samples.tolist() == [0, 1, 2, 3, 4, 5]


def test_decode_wav_reads_header() -> None:
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(44100)
        wf.writeframes(np.array([1, -1, 2], dtype="<i2").tobytes())

    # Sniffed from the RIFF magic even with a generic mime type.
    samples, rate = decode_audio(buf.getvalue(), "application/octet-stream")
    assert rate == 44100
    assert samples.tolist() == [1, -1, 2]


# --- inputs ---


@pytest.mark.asyncio
async def test_stdin_lines_skips_blank_lines() -> None:
    stream = io.StringIO("hello\n\n   \nhow are you?\r\nlast")
    lines = [line async for line in stdin_lines(stream)]
    assert lines == ["hello", "how are you?", "last"]


@pytest.mark.asyncio
async def test_microphone_chunks_retries_failed_captures() -> None:
    results: list[object] = [RuntimeError("device busy"), b"", b"\x01\x00", b"\x02\x00"]
    sleeps: list[float] = []

    def _capture(seconds: float) -> bytes:
        assert seconds == 3.0
        outcome = results.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def _sleep(delay: float) -> None:
        sleeps.append(delay)

    chunks = [
        chunk
        async for chunk in microphone_chunks(_capture, 3.0, retry_delay_s=0.25, max_chunks=2, sleep=_sleep)
    ]

    assert chunks == [b"\x01\x00", b"\x02\x00"]
    assert sleeps == [0.25]
    assert results == []


@pytest.mark.asyncio
async def test_microphone_chunks_stops_at_limit() -> None:
    produced = [chunk async for chunk in microphone_chunks(lambda _s: b"\x00\x00", 0.1, max_chunks=3)]
    assert len(produced) == 3


# --- console ---


def test_console_sink_labels_replies(capsys) -> None:
    console_sink(MessageKind.AI_RESPONSE, "hi there")
    console_sink(MessageKind.ERROR, "Sorry, I'm having trouble thinking right now.")
    out = capsys.readouterr().out
    assert "Robot: hi there" in out
    assert "Server: Sorry, I'm having trouble thinking right now." in out
