"""
program
-------

Pulumi 프로그램 엔트리포인트. `pulumi up` 실행 시 __main__.py 에서 호출된다.
"""

from __future__ import annotations

from typing import Optional

from .config import ServiceConfig, load_env_files
from .logging_utils import get_logger
from .pulumi_engine import PulumiProvisioner
from .service import ServiceHandle, build_service


logger = get_logger(__name__)


def run(cfg: Optional[ServiceConfig] = None, base_dir: str = ".") -> ServiceHandle:
    """
    설정을 로드하고 토폴로지를 한 번 선언한다.
    예외는 그대로 전파되어 pulumi 런타임이 실행을 실패로 처리한다.
    """
    if cfg is None:
        load_env_files(base_dir)
        cfg = ServiceConfig.from_env()
    logger.debug("Config loaded: %s", cfg)

    return build_service(
        PulumiProvisioner(),
        cfg.service_name,
        cfg.to_service_args(),
        template_path=cfg.openapi_template,
        function_name=cfg.function_name,
        base_dir=base_dir,
    )
