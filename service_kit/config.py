from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, List

from dotenv import load_dotenv

from .service import ServiceArgs


ENV_FILES_DEFAULT_ORDER = [".env", ".env.infra"]

# 기존 엔트리포인트에 고정되어 있던 값들. 환경변수가 없을 때의 기본값으로 쓴다.
DEFAULT_PROJECT_ID = "project"
DEFAULT_REGION = "europe-west2"
DEFAULT_FUNCTION_SOURCE_DIR = "pkg/helloworld"
DEFAULT_SERVICE_NAME = "myService"
DEFAULT_FUNCTION_NAME = "function"
DEFAULT_OPENAPI_TEMPLATE = "openapi.yaml"


def load_env_files(base_dir: str = ".",
                   files: Optional[List[str]] = None) -> None:
    """
    주어진 디렉토리에서 .env 계열 파일을 순서대로 로드한다.
    후순위 파일이 같은 키를 덮어쓴다.
    """
    order = files or ENV_FILES_DEFAULT_ORDER
    for name in order:
        path = os.path.join(base_dir, name)
        if os.path.exists(path):
            load_dotenv(path, override=True)


@dataclass
class ServiceConfig:
    gcp_project_id: str = DEFAULT_PROJECT_ID
    gcp_region: str = DEFAULT_REGION
    function_source_dir: str = DEFAULT_FUNCTION_SOURCE_DIR

    service_name: str = DEFAULT_SERVICE_NAME
    function_name: str = DEFAULT_FUNCTION_NAME
    openapi_template: str = DEFAULT_OPENAPI_TEMPLATE

    @classmethod
    def from_env(cls) -> "ServiceConfig":
        # 빈 문자열로 설정된 값은 그대로 두고, 검증은 토폴로지 빌더에 맡긴다.
        return cls(
            gcp_project_id=os.getenv("GCP_PROJECT_ID", DEFAULT_PROJECT_ID),
            gcp_region=os.getenv("GCP_REGION", DEFAULT_REGION),
            function_source_dir=os.getenv(
                "FUNCTION_SOURCE_DIR", DEFAULT_FUNCTION_SOURCE_DIR
            ),
            service_name=os.getenv("SERVICE_NAME", DEFAULT_SERVICE_NAME),
            function_name=os.getenv("FUNCTION_NAME", DEFAULT_FUNCTION_NAME),
            openapi_template=os.getenv("OPENAPI_TEMPLATE", DEFAULT_OPENAPI_TEMPLATE),
        )

    def to_service_args(self) -> ServiceArgs:
        return ServiceArgs(
            project=self.gcp_project_id,
            region=self.gcp_region,
            path=self.function_source_dir,
        )
