"""
service_kit
-----------

GCP Cloud Function + API Gateway 토폴로지를 Pulumi 로 선언하는 패키지.
버킷 → 소스 오브젝트 → 함수 → IAM 바인딩 → API → API Config → Gateway 순서로
리소스를 선언하고, 게이트웨이 호스트명을 `url` 로 export 한다.
"""

__all__ = [
    "config",
    "renderer",
    "service",
]
