"""
renderer
--------

OpenAPI 템플릿에 프로젝트/리전/함수 이름을 채워 넣고,
API Config 리소스에 그대로 넣을 수 있도록 base64 로 인코딩하는 모듈.

템플릿은 Jinja2 표현식을 사용하며 다음 네 개의 이름만 인식한다:
``{{ path }}``, ``{{ project }}``, ``{{ region }}``, ``{{ function_name }}``
"""

from __future__ import annotations

import base64
import os
from dataclasses import dataclass, asdict

from jinja2 import Environment, StrictUndefined

from .errors import ProvisioningError
from .logging_utils import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class RenderRequest:
    # 템플릿 파일 경로. 템플릿 안에서도 {{ path }} 로 참조할 수 있다.
    path: str
    project: str
    region: str
    function_name: str


def _environment() -> Environment:
    env = Environment(
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        autoescape=False,
    )
    # 기본값 없이 네 개의 값만 치환한다.
    env.filters.pop("default", None)
    env.filters.pop("d", None)
    return env


def _resolve(base_dir: str, path: str) -> str:
    if os.path.isabs(path):
        return path
    return os.path.join(base_dir, path)


def render_text(request: RenderRequest, base_dir: str = ".") -> str:
    """
    템플릿 파일을 읽어 치환된 텍스트를 리턴한다.
    상대 경로는 base_dir 기준으로 찾지만, {{ path }} 에는 설정된 경로가 그대로 들어간다.
    파일을 읽지 못하거나 템플릿 파싱/렌더링에 실패하면 ProvisioningError.
    """
    file_path = _resolve(base_dir, request.path)
    logger.debug("템플릿 렌더링: %s", file_path)
    try:
        with open(file_path, "rb") as f:
            source = f.read().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ProvisioningError(
            f"템플릿 파일을 읽을 수 없습니다: {file_path} ({e})"
        ) from e

    try:
        template = _environment().from_string(source)
        return template.render(**asdict(request))
    except Exception as e:  # noqa: BLE001
        raise ProvisioningError(
            f"템플릿 렌더링에 실패했습니다: {file_path} ({e})"
        ) from e


def encode_document(text: str) -> str:
    # 표준 알파벳, 줄바꿈 없음
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode_document(encoded: str) -> str:
    return base64.b64decode(encoded.encode("ascii"), validate=True).decode("utf-8")


def render(request: RenderRequest, base_dir: str = ".") -> str:
    """
    템플릿을 렌더링하고 base64 로 인코딩한 문자열을 리턴한다.
    """
    return encode_document(render_text(request, base_dir))
