#!filepath: tests/utils/test_logger.py
import pytest
from loguru import logger

from tracedoc.config.log_config import LogConfig
from tracedoc.utils.logger import Logging, init_logging, logs


@pytest.fixture
def captured():
    lines = []
    sink_id = logger.add(lambda msg: lines.append(str(msg)))
    yield lines
    logger.remove(sink_id)


def test_catch_logs_and_reraises(captured):
    @logs.catch("boom failed")
    def boom():
        raise KeyError("x")

    with pytest.raises(KeyError):
        boom()

    assert any("[ERROR] boom: boom failed" in line for line in captured)


def test_catch_logs_time_and_io(captured):
    @logs.catch(log_inputs=True, log_outputs=True)
    def add(a, b=0):
        return a + b

    assert add(1, b=2) == 3

    output = "\n".join(captured)
    assert "[CALL] add" in output
    assert "[RETURN] add result=3" in output
    assert "[TIME] add took" in output


def test_warning_prints_and_logs(captured, capsys):
    logs.warning("careful")

    assert "careful" in capsys.readouterr().out
    assert any("careful" in line for line in captured)


def test_logging_creates_dir(tmp_path):
    log_dir = tmp_path / "a" / "b"
    Logging(log_dir=str(log_dir))
    assert log_dir.is_dir()


def test_init_logging_reconfigures_global(tmp_path):
    cfg = LogConfig(dir=str(tmp_path / "logs"), level="DEBUG")
    out = init_logging(cfg)

    assert out is logs
    assert logs.level == "DEBUG"
    assert (tmp_path / "logs").is_dir()
