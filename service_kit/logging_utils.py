import logging
import sys

import pulumi


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class PulumiLogHandler(logging.Handler):
    """
    로그 레코드를 pulumi 진단 로그로 전달한다.
    `pulumi up` 실행 중에는 stdout 대신 이 핸들러를 사용해야 엔진 출력에 함께 표시된다.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            if record.levelno >= logging.ERROR:
                pulumi.log.error(msg)
            elif record.levelno >= logging.WARNING:
                pulumi.log.warn(msg)
            elif record.levelno >= logging.INFO:
                pulumi.log.info(msg)
            else:
                pulumi.log.debug(msg)
        except Exception:  # noqa: BLE001
            self.handleError(record)


def setup_logging(verbosity: int = 0, pulumi_engine: bool = False) -> None:
    level = logging.INFO
    if verbosity >= 1:
        level = logging.DEBUG

    if pulumi_engine:
        handler = PulumiLogHandler()
        handler.setFormatter(logging.Formatter("%(name)s | %(message)s"))
        logging.basicConfig(level=level, handlers=[handler])
        return

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        stream=sys.stdout,
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
