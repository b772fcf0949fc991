"""
pulumi_engine
-------------

Provisioner 인터페이스의 Pulumi 구현.
선언 종류(kind)를 pulumi_gcp 리소스 클래스에 매핑하고, parent 옵션을 붙여 생성한다.
"""

from __future__ import annotations

from typing import Any, Mapping

import pulumi
from pulumi_gcp import apigateway, cloudfunctions, storage

from .errors import ProvisioningError
from .logging_utils import get_logger
from .provisioner import Provisioner


logger = get_logger(__name__)


RESOURCE_KINDS = {
    "storage.Bucket": storage.Bucket,
    "storage.BucketObject": storage.BucketObject,
    "cloudfunctions.Function": cloudfunctions.Function,
    "cloudfunctions.FunctionIamMember": cloudfunctions.FunctionIamMember,
    "apigateway.Api": apigateway.Api,
    "apigateway.ApiConfig": apigateway.ApiConfig,
    "apigateway.Gateway": apigateway.Gateway,
}


class PulumiProvisioner(Provisioner):
    def component(
        self,
        type_token: str,
        name: str,
        opts: pulumi.ResourceOptions | None = None,
    ) -> pulumi.ComponentResource:
        try:
            return pulumi.ComponentResource(type_token, name, None, opts)
        except Exception as e:  # noqa: BLE001
            raise ProvisioningError(f"컴포넌트 등록 실패: {name} ({e})") from e

    def declare(
        self,
        kind: str,
        name: str,
        args: Mapping[str, Any],
        *,
        parent: Any,
    ) -> pulumi.CustomResource:
        resource_cls = RESOURCE_KINDS.get(kind)
        if resource_cls is None:
            raise ProvisioningError(f"지원하지 않는 리소스 종류입니다: {kind}")

        logger.debug("pulumi 리소스 생성: %s (%s)", name, resource_cls.__name__)
        try:
            return resource_cls(
                name,
                opts=pulumi.ResourceOptions(parent=parent),
                **args,
            )
        except Exception as e:  # noqa: BLE001
            raise ProvisioningError(f"리소스 선언 실패: {name} ({e})") from e

    def output(self, resource: Any, field_name: str) -> pulumi.Output:
        return getattr(resource, field_name)

    def archive(self, path: str) -> pulumi.FileArchive:
        return pulumi.FileArchive(path)

    def export(self, name: str, value: Any) -> None:
        pulumi.export(name, value)

    def finish(self, component: Any, outputs: Mapping[str, Any]) -> None:
        component.register_outputs(dict(outputs))
