import logging
import os
import tempfile

from beam_statics.services.logging_setup import ROOT_LOGGER, reset_logging, setup_logging


def test_setup_logging_writes_file_and_is_idempotent():
    with tempfile.TemporaryDirectory() as td:
        try:
            logger = setup_logging(log_dir=td, console=False)
            n = len(logger.handlers)
            assert setup_logging(log_dir=td, console=False) is logger
            assert len(logger.handlers) == n

            logging.getLogger(f"{ROOT_LOGGER}.engine.test").info("hola")
            for h in logger.handlers:
                h.flush()
            with open(os.path.join(td, "beam_statics.log"), encoding="utf-8") as fh:
                text = fh.read()
            assert "| INFO | beam_statics.engine.test | hola" in text
        finally:
            reset_logging()


def test_setup_logging_without_outputs_uses_null_handler():
    try:
        logger = setup_logging(log_dir=None, console=False)
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.NullHandler)
    finally:
        reset_logging()
    assert logging.getLogger(ROOT_LOGGER).handlers == []
