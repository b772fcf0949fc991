import logging

import pytest

from service_kit import logging_utils


def test_pulumi_log_handler_maps_levels(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[str, str]] = []

    for name in ("debug", "info", "warn", "error"):
        monkeypatch.setattr(
            logging_utils.pulumi.log,
            name,
            lambda msg, _name=name, **kwargs: calls.append((_name, msg)),
        )

    logger = logging.getLogger("service_kit.test_pulumi_handler")
    logger.propagate = False
    logger.setLevel(logging.DEBUG)
    handler = logging_utils.PulumiLogHandler()
    logger.addHandler(handler)
    try:
        logger.debug("d")
        logger.info("i")
        logger.warning("w")
        logger.error("e")
    finally:
        logger.removeHandler(handler)

    assert calls == [("debug", "d"), ("info", "i"), ("warn", "w"), ("error", "e")]
