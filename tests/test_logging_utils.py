# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-21
# Description: test_logging_utils.py
# -----------------------------------------------------------------------------
from utility.logging_utils import attach_file_log, detach_file_log, get_class_logger, get_logger


class _Worker:
    pass


def test_class_logger_is_named_after_module_and_class():
    logger = get_class_logger(_Worker)
    assert logger.name == f"densesearch.{__name__}._Worker"


def test_file_log_receives_child_records_until_detached(tmp_path):
    log_file = tmp_path / "run.log"
    handler = attach_file_log(log_file)
    assert attach_file_log(log_file) is handler

    get_logger("jobs").info("batch 3 written")
    detach_file_log(handler)
    get_logger("jobs").info("after detach")

    content = log_file.read_text(encoding="utf-8")
    assert "densesearch.jobs" in content
    assert "batch 3 written" in content
    assert "after detach" not in content
