from __future__ import annotations

import os
from typing import List

from .config import ServiceConfig
from .errors import ProvisioningError
from .logging_utils import get_logger
from .provisioner import RecordingProvisioner
from .renderer import RenderRequest, render_text
from .service import build_service


logger = get_logger(__name__)


def _resolve(base_dir: str, path: str) -> str:
    if not path or os.path.isabs(path):
        return path
    return os.path.join(base_dir, path)


def _format_value(value: object) -> str:
    if isinstance(value, str) and len(value) > 60:
        return f"<{len(value)} chars>"
    if isinstance(value, list):
        return "[" + ", ".join(_format_value(v) for v in value) + "]"
    if isinstance(value, dict):
        inner = ", ".join(f"{k}={_format_value(v)}" for k, v in value.items())
        return "{" + inner + "}"
    return str(value)


def plan_all(cfg: ServiceConfig, base_dir: str = ".") -> str:
    """
    RecordingProvisioner 로 토폴로지를 선언해 보고, 선언 순서/의존 관계를
    요약 텍스트로 리턴한다. 실제 GCP 호출은 하지 않는다.

    Raises:
        ValidationError, ProvisioningError: build_service 와 동일.
    """
    recorder = RecordingProvisioner()
    build_service(
        recorder,
        cfg.service_name,
        cfg.to_service_args(),
        template_path=cfg.openapi_template,
        function_name=cfg.function_name,
        base_dir=base_dir,
    )

    lines: List[str] = []
    lines.append("# Service plan")
    lines.append(f"- service: {cfg.service_name}")
    lines.append(f"- project: {cfg.gcp_project_id}")
    lines.append(f"- region: {cfg.gcp_region}")
    lines.append("")

    lines.append("## Config summary")
    lines.append(f"- function_source_dir: {cfg.function_source_dir}")
    lines.append(f"- function_name: {cfg.function_name}")
    lines.append(f"- openapi_template: {cfg.openapi_template}")
    lines.append("")

    lines.append("## Declarations")
    for i, decl in enumerate(recorder.declarations, start=1):
        lines.append(f"{i}. {decl.name} ({decl.kind}) parent={decl.parent}")
        deps = ", ".join(decl.depends_on) if decl.depends_on else "(none)"
        lines.append(f"   - depends_on: {deps}")
        for key, value in decl.args.items():
            lines.append(f"   - {key}: {_format_value(value)}")

    lines.append("")
    lines.append("## Exports")
    if recorder.exports:
        for key, value in recorder.exports.items():
            lines.append(f"- {key}: {value}")
    else:
        lines.append("- (none)")

    return "\n".join(lines)


def check_all(cfg: ServiceConfig, base_dir: str = ".", show_all: bool = False) -> tuple[str, bool]:
    """
    리소스 선언 없이, 로컬 설정/파일 상태를 점검한다.

    Returns:
        summary: 사람이 읽기 좋은 텍스트 요약
        has_issues: 배포 전에 해결해야 할 이슈가 있는지 여부
    """
    lines: List[str] = []
    results: List[str] = []
    issues: List[str] = []

    lines.append("# Service pre-check")
    lines.append(f"- project: {cfg.gcp_project_id}")
    lines.append(f"- region: {cfg.gcp_region}")
    lines.append("")

    # 1) 필수 설정값
    for label, value in (
        ("GCP_PROJECT_ID", cfg.gcp_project_id),
        ("GCP_REGION", cfg.gcp_region),
        ("FUNCTION_SOURCE_DIR", cfg.function_source_dir),
    ):
        if value:
            results.append(f"Config: {label}={value}")
        else:
            msg = f"Config: {label} 가 설정되지 않았습니다."
            results.append(msg)
            issues.append(msg)

    # 2) 함수 소스 디렉토리
    source_dir = _resolve(base_dir, cfg.function_source_dir)
    if cfg.function_source_dir:
        if not os.path.isdir(source_dir):
            msg = f"Source: 디렉토리 없음 ({source_dir})"
            issues.append(msg)
        elif not os.listdir(source_dir):
            msg = f"Source: 디렉토리가 비어 있음 ({source_dir})"
            issues.append(msg)
        else:
            msg = f"Source: 존재함 ({source_dir})"
        results.append(msg)

    # 3) OpenAPI 템플릿
    template_path = _resolve(base_dir, cfg.openapi_template)
    try:
        text = render_text(
            RenderRequest(
                path=cfg.openapi_template,
                project=cfg.gcp_project_id,
                region=cfg.gcp_region,
                function_name=cfg.function_name,
            ),
            base_dir,
        )
        results.append(f"Template: 렌더링 성공 ({template_path}, {len(text)} chars)")
    except ProvisioningError as e:
        msg = f"Template: {e}"
        results.append(msg)
        issues.append(msg)

    if show_all:
        lines.append("## Checks")
        for r in results:
            lines.append(f"- {r}")
        lines.append("")

    lines.append("## Summary")
    if issues:
        lines.append("- 상태: 이슈가 있습니다. 배포 전 반드시 해결해야 합니다.")
        lines.append("")
        lines.append("### Issues")
        for i in issues:
            lines.append(f"- {i}")
    else:
        lines.append("- 상태: 주요 이슈 없음 (배포 가능 상태로 보입니다)")

    if not show_all:
        lines.append("")
        lines.append("자세한 상태를 보려면 `service-kit check -a` 를 실행하세요.")

    return "\n".join(lines), bool(issues)
