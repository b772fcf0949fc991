import os
import sys

import click
from dotenv import dotenv_values

from .config import ENV_FILES_DEFAULT_ORDER, load_env_files, ServiceConfig
from .errors import ServiceKitError
from .logging_utils import setup_logging, get_logger
from .orchestrator import check_all, plan_all
from .renderer import RenderRequest, encode_document, render_text


logger = get_logger(__name__)


@click.group()
@click.option(
    "-C",
    "--chdir",
    "chdir",
    type=click.Path(file_okay=False, dir_okay=True, exists=True),
    default=".",
    help="작업 디렉토리 (기본: 현재 디렉토리)",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="로그 레벨을 DEBUG로 올립니다.",
)
@click.pass_context
def main(ctx: click.Context, chdir: str, verbose: int) -> None:
    """Cloud Function + API Gateway 토폴로지 점검/미리보기 CLI"""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["chdir"] = chdir
    ctx.obj["verbose"] = verbose


def _load_config_from_ctx(ctx: click.Context) -> ServiceConfig:
    base_dir: str = ctx.obj["chdir"]
    load_env_files(base_dir)
    cfg = ServiceConfig.from_env()
    logger.debug("Config loaded: %s", cfg)
    return cfg


def _build_env_dump(base_dir: str) -> str:
    """
    .env / .env.infra 의 내용을 그대로 덤프한다.
    """
    lines: list[str] = []
    for filename in ENV_FILES_DEFAULT_ORDER:
        lines.append(f"## {filename}")
        path_values = dotenv_values(dotenv_path=os.path.join(base_dir, filename))
        if not path_values:
            lines.append("- (파일이 없거나 비어 있습니다)")
        else:
            for k, v in sorted(path_values.items()):
                # None 은 dotenv 에서 값이 없는 키를 의미하므로 스킵
                if v is None:
                    continue
                lines.append(f"- {k}={v}")
        lines.append("")
    return "\n".join(lines).rstrip()


@main.command()
@click.option(
    "-a",
    "--all",
    "show_all",
    is_flag=True,
    help=".env 파일에서 읽은 원본 값도 함께 출력합니다.",
)
@click.pass_context
def plan(ctx: click.Context, show_all: bool) -> None:
    """원격 호출 없이 선언될 리소스 목록과 의존 관계를 출력"""
    cfg = _load_config_from_ctx(ctx)
    base_dir: str = ctx.obj["chdir"]

    try:
        report = plan_all(cfg, base_dir=base_dir)
    except ServiceKitError as e:
        click.echo(f"[ERROR] 토폴로지 선언 실패: {e}", err=True)
        sys.exit(1)

    if show_all:
        env_dump = _build_env_dump(base_dir)
        report = report + "\n\n" + "## Raw env from files\n" + env_dump

    click.echo(report)


@main.command()
@click.option(
    "--encoded/--decode",
    "encoded",
    default=False,
    help="--encoded: API Config 에 들어가는 base64 인코딩 결과, --decode: 치환된 원문 (기본)",
)
@click.pass_context
def render(ctx: click.Context, encoded: bool) -> None:
    """OpenAPI 템플릿을 현재 설정으로 렌더링해 출력"""
    cfg = _load_config_from_ctx(ctx)
    base_dir: str = ctx.obj["chdir"]

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
    except ServiceKitError as e:
        click.echo(f"[ERROR] 렌더링 실패: {e}", err=True)
        sys.exit(1)

    if encoded:
        click.echo(encode_document(text))
    else:
        click.echo(text, nl=False)


@main.command()
@click.option(
    "-a",
    "--all",
    "show_all",
    is_flag=True,
    help="모든 체크 항목의 상세 상태를 출력합니다. (기본은 이슈만 요약)",
)
@click.pass_context
def check(ctx: click.Context, show_all: bool) -> None:
    """
    `pulumi up` 전에 설정값/소스 디렉토리/템플릿 상태를 점검한다.
    """
    cfg = _load_config_from_ctx(ctx)
    base_dir: str = ctx.obj["chdir"]

    report, has_issues = check_all(cfg, base_dir=base_dir, show_all=show_all)
    click.echo(report)

    # 이슈가 있으면 exit 1 로 종료하여 CI 등에서 감지 가능하게 한다.
    if has_issues:
        sys.exit(1)
