import logging

from structurizr_site.log import LOG_FORMAT, LowercaseLevelFormatter, configure_logging


def test_formatter_lowercases_level():
    formatter = LowercaseLevelFormatter(LOG_FORMAT)
    record = logging.LogRecord("structurizr_site.site", logging.WARNING, __file__, 1, "page %s skipped", ("x",), None)
    assert formatter.format(record) == "warning: page x skipped"


def test_configure_logging_installs_single_handler():
    logger = logging.getLogger("structurizr_site")
    try:
        configure_logging()
        configure_logging(verbose=True)
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG
    finally:
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)
        logger.propagate = True
