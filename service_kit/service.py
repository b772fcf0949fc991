"""
service
-------

Cloud Function + API Gateway 토폴로지를 선언하는 모듈.

선언 순서는 고정이며, 뒤의 선언은 앞서 선언한 리소스의 출력만 참조한다.
    bucket → source-zip → function → invoker → api → api-config → gateway
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, List, Optional

from .errors import ValidationError
from .logging_utils import get_logger
from .provisioner import Provisioner
from .renderer import RenderRequest, render


logger = get_logger(__name__)


SERVICE_TYPE = "service-kit:gcp:Service"

BUCKET_LOCATION = "EU"
FUNCTION_RUNTIME = "python312"
FUNCTION_ENTRY_POINT = "handler"
FUNCTION_MEMORY_MB = 128

# 함수는 인증 없이 누구나 호출할 수 있도록 공개한다.
INVOKER_ROLE = "roles/cloudfunctions.invoker"
INVOKER_MEMBER = "allUsers"

API_ID = "api"
API_CONFIG_ID = "cfg"
GATEWAY_ID = "gateway"


@dataclass
class ServiceArgs:
    project: str
    region: str
    # 함수 소스 코드가 있는 디렉토리. e.g. "pkg/helloworld"
    path: str


@dataclass
class ServiceHandle:
    name: str
    component: Any
    declarations: List[Any] = field(default_factory=list)
    url: Any = None


def _validate(args: Optional[ServiceArgs]) -> ServiceArgs:
    if args is None:
        raise ValidationError("missing one or more required arguments")
    if not args.project:
        raise ValidationError("missing project argument")
    if not args.region:
        raise ValidationError("missing region argument")
    if not args.path:
        raise ValidationError("missing path argument")
    return args


def build_service(
    provisioner: Provisioner,
    name: str,
    args: Optional[ServiceArgs],
    *,
    template_path: str = "openapi.yaml",
    function_name: str = "function",
    base_dir: str = ".",
    opts: Any = None,
) -> ServiceHandle:
    """
    토폴로지를 선언하고 ServiceHandle 을 리턴한다.

    Raises:
        ValidationError: project/region/path 중 하나라도 비어 있는 경우.
            이 경우 provisioner 는 한 번도 호출되지 않는다.
        ProvisioningError: 템플릿 렌더링 또는 리소스 선언 실패.
    """
    args = _validate(args)

    logger.info(
        "서비스 토폴로지 선언: %s (project=%s, region=%s, path=%s)",
        name,
        args.project,
        args.region,
        args.path,
    )

    component = provisioner.component(SERVICE_TYPE, name, opts)
    handle = ServiceHandle(name=name, component=component)

    def declare(kind: str, resource_name: str, **resource_args: Any) -> Any:
        logger.info("리소스 선언: %s (%s)", resource_name, kind)
        logger.debug("리소스 인자: %s=%s", resource_name, resource_args)
        resource = provisioner.declare(
            kind, resource_name, resource_args, parent=component
        )
        handle.declarations.append(resource)
        return resource

    out = provisioner.output

    # 1) 소스 아카이브를 담을 버킷
    bucket = declare("storage.Bucket", "bucket", location=BUCKET_LOCATION)

    # 2) 소스 디렉토리 아카이브
    bucket_object = declare(
        "storage.BucketObject",
        "source-zip",
        bucket=out(bucket, "name"),
        source=provisioner.archive(args.path),
    )

    # 3) HTTP 트리거 함수
    function = declare(
        "cloudfunctions.Function",
        "function",
        name=function_name,
        source_archive_bucket=out(bucket, "name"),
        source_archive_object=out(bucket_object, "name"),
        runtime=FUNCTION_RUNTIME,
        entry_point=FUNCTION_ENTRY_POINT,
        trigger_http=True,
        available_memory_mb=FUNCTION_MEMORY_MB,
    )

    # 4) 공개 호출 권한
    declare(
        "cloudfunctions.FunctionIamMember",
        "invoker",
        project=out(function, "project"),
        cloud_function=out(function, "name"),
        role=INVOKER_ROLE,
        member=INVOKER_MEMBER,
    )

    # 5) API
    api = declare("apigateway.Api", "api", api_id=API_ID)

    # 6) API Config. 문서는 API 선언 이후에 렌더링한다.
    contents = render(
        RenderRequest(
            path=template_path,
            project=args.project,
            region=args.region,
            function_name=function_name,
        ),
        base_dir,
    )
    api_config = declare(
        "apigateway.ApiConfig",
        "api-config",
        api=out(api, "api_id"),
        api_config_id=API_CONFIG_ID,
        openapi_documents=[
            {
                "document": {
                    "path": os.path.basename(template_path),
                    "contents": contents,
                },
            },
        ],
    )

    # 7) Gateway
    gateway = declare(
        "apigateway.Gateway",
        "gateway",
        api_config=out(api_config, "id"),
        gateway_id=GATEWAY_ID,
    )

    handle.url = out(gateway, "default_hostname")
    provisioner.export("url", handle.url)
    provisioner.finish(component, {"url": handle.url})

    logger.info("서비스 토폴로지 선언 완료: %s (%d 개 리소스)", name, len(handle.declarations))
    return handle
