"""
errors
------

service_kit 에서 사용하는 예외 계층.

- ValidationError: 필수 인자 누락. 어떤 리소스도 선언되기 전에 발생하며 복구 가능.
- ProvisioningError: 템플릿 로드/렌더링 또는 리소스 선언 실패. 치명적이며 재시도하지 않는다.
"""

from __future__ import annotations


class ServiceKitError(Exception):
    pass


class ValidationError(ServiceKitError, ValueError):
    pass


class ProvisioningError(ServiceKitError, RuntimeError):
    pass
