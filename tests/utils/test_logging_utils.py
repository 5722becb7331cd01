import json
import logging

from repo_api.utils import logging_utils
from repo_api.utils.logging_utils import JsonFormatter, get_logger, logging_context


def current_context():
    return dict(logging_utils._LOG_CONTEXT.get())


def test_logging_context_binds_and_restores():
    with logging_context(repo="octo/hello", number=None):
        assert current_context() == {"repo": "octo/hello"}
        with logging_context(number=7):
            assert current_context() == {"repo": "octo/hello", "number": 7}
        assert current_context() == {"repo": "octo/hello"}

    assert current_context() == {}


def test_adapter_merges_bound_and_extra_context(caplog):
    logger = get_logger("repo_api.tests")

    with caplog.at_level(logging.INFO, logger="repo_api.tests"):
        with logging_context(repo="octo/hello"):
            logger.info("Created comment", extra={"context": {"number": 4}})

    record = caplog.records[-1]
    assert record.context == {"repo": "octo/hello", "number": 4}


def test_json_formatter_emits_context():
    record = logging.LogRecord("repo_api.x", logging.WARNING, __file__, 1, "upload %s", ("failed",), None)
    record.context = {"branch": "images"}

    with logging_context(repo="octo/hello"):
        payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "repo_api.x"
    assert payload["message"] == "upload failed"
    assert payload["context"] == {"repo": "octo/hello", "branch": "images"}
    assert payload["timestamp"].endswith("Z")


def test_setup_logging_installs_single_handler(monkeypatch):
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    monkeypatch.setenv("LOG_LEVEL", "debug")
    try:
        logging_utils.setup_logging()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        assert root.level == logging.DEBUG

        logging_utils.setup_logging(level="warning", use_json=False)
        assert not isinstance(root.handlers[0].formatter, JsonFormatter)
        assert root.level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
