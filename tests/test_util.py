import logging
import socket

from talker.util import LOG, configure_logging, get_local_ip


def test_configure_logging_is_repeatable(tmp_path):
    log_file = tmp_path / "talker.log"
    try:
        configure_logging()
        logger = configure_logging(debug=True, log_file=str(log_file))

        assert logger is LOG
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2

        logger.debug("composing -> idle")
        for handler in logger.handlers:
            handler.flush()
        assert "composing -> idle" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in list(LOG.handlers):
            LOG.removeHandler(handler)
            handler.close()


def test_get_local_ip_is_ipv4():
    socket.inet_pton(socket.AF_INET, get_local_ip())
