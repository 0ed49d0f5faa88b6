import logging

from densematrix import Matrix
from densematrix.logging_config import setup_logging


def test_setup_logging_is_idempotent(tmp_path):
    log_file = tmp_path / "densematrix.log"
    setup_logging(logging.DEBUG)
    logger = setup_logging(logging.DEBUG, str(log_file))
    assert logger.name == "densematrix"
    assert len(logger.handlers) == 2
    Matrix(2, 2, [0, 1, 1, 0]).inverse()
    for handler in logger.handlers:
        handler.flush()
    assert "swapping rows 0 and 1" in log_file.read_text(encoding="utf-8")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def test_library_emits_debug_records(caplog):
    with caplog.at_level(logging.DEBUG, logger="densematrix"):
        Matrix(3, 3, [1, 2, 3, 2, 4, 6, 3, 6, 9]).rank()
    assert "Rank of 3x3 grid is 1" in caplog.text
