"""
pytest 설정:

로컬 작업 환경에 설치된 다른 버전의 service_kit 패키지가 존재할 때,
`pytest` 실행 시 site-packages 쪽이 먼저 import 되어 테스트가 깨질 수 있다.

테스트는 항상 현재 레포의 소스를 대상으로 해야 하므로, repo root 를 sys.path 최상단에 고정한다.
"""

from __future__ import annotations

import os
import sys

import pytest


REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

ENV_KEYS = (
    "GCP_PROJECT_ID",
    "GCP_REGION",
    "FUNCTION_SOURCE_DIR",
    "SERVICE_NAME",
    "FUNCTION_NAME",
    "OPENAPI_TEMPLATE",
)

TEMPLATE = (
    "source: {{ path }}\n"
    "project: {{ project }}\n"
    "region: {{ region }}\n"
    "function: {{ function_name }}\n"
)


def pytest_configure() -> None:
    if REPO_ROOT not in sys.path:
        sys.path.insert(0, REPO_ROOT)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # load_dotenv 가 넣은 값도 테스트 후 되돌려지도록 먼저 setenv 로 기록해 둔다.
    for key in ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


@pytest.fixture
def template_file(tmp_path) -> str:
    path = tmp_path / "openapi.yaml"
    path.write_text(TEMPLATE, encoding="utf-8")
    return str(path)
