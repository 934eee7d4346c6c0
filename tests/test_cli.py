import logging

import pytest

from pathmover.main import main
from pathmover.utils import create_file


@pytest.fixture
def config_file(tmp_path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(f"logging:\n  logs_dir: {tmp_path / 'logs'}\n", encoding="utf-8")
    yield cfg
    logger = logging.getLogger("pathmover")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def test_cli_move(scratch, config_file):
    src = create_file(scratch / "a.txt", "hello")
    rc = main(["move", str(src), str(scratch / "out" / "b.txt"), "--config", str(config_file)])
    assert rc == 0
    assert not src.exists()
    assert (scratch / "out" / "b.txt").read_text(encoding="utf-8") == "hello"
    assert (config_file.parent / "logs" / "pathmover.log").exists()


def test_cli_failure_exit_code(scratch, config_file):
    rc = main(["move-dir", str(scratch / "missing"), str(scratch / "dest"), "--config", str(config_file)])
    assert rc == 1
    assert not (scratch / "dest").exists()


def test_cli_copy_and_empty(scratch, config_file):
    create_file(scratch / "tree" / "x.txt", "x")
    assert main(["copy", str(scratch / "tree"), str(scratch / "tree2"), "--config", str(config_file)]) == 0
    assert (scratch / "tree2" / "x.txt").read_text(encoding="utf-8") == "x"
    assert main(["empty", str(scratch / "tree"), "--config", str(config_file)]) == 0
    assert list((scratch / "tree").iterdir()) == []
