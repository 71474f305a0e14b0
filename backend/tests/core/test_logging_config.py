import logging
from datetime import datetime

from motoshop.core.config import settings
from motoshop.core.logging_config import PAYMENT_LOGGER, ColoredFormatter, setup_logging


def read_log(directory, kind):
    for handler in logging.getLogger().handlers + logging.getLogger(PAYMENT_LOGGER).handlers:
        handler.flush()
    return (directory / f"{kind}_{datetime.now():%Y-%m-%d}.log").read_text(encoding="utf-8")


def test_payment_messages_get_their_own_file(tmp_path):
    setup_logging("INFO", str(tmp_path))
    try:
        logging.getLogger("motoshop.services.receivables.settlement").info("payment applied")
        logging.getLogger("motoshop.api").info("request handled")
        logging.getLogger("motoshop.api").error("request failed")

        payments = read_log(tmp_path, "payments")
        app_log = read_log(tmp_path, "app")
        errors = read_log(tmp_path, "error")
    finally:
        setup_logging(settings.LOG_LEVEL)

    assert "payment applied" in payments
    assert "request handled" not in payments
    assert "payment applied" in app_log and "request handled" in app_log
    assert "request failed" in errors
    assert "request handled" not in errors


def test_colored_formatter_leaves_record_untouched():
    record = logging.LogRecord("motoshop", logging.WARNING, __file__, 1, "careful", None, None)

    text = ColoredFormatter("%(levelname)s %(message)s").format(record)

    assert "\033[33m" in text
    assert record.levelname == "WARNING"
