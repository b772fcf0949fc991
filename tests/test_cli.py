import base64

from click.testing import CliRunner

from service_kit.cli import main


def _workspace(tmp_path) -> str:
    (tmp_path / "openapi.yaml").write_text(
        "host: {{ region }}-{{ project }}/{{ function_name }}\n", encoding="utf-8"
    )
    source = tmp_path / "pkg" / "helloworld"
    source.mkdir(parents=True)
    (source / "main.py").write_text("def handler(request):\n    return 'ok'\n")
    (tmp_path / ".env.infra").write_text("GCP_PROJECT_ID=proj\n")
    return str(tmp_path)


def test_plan_prints_topology(tmp_path, clean_env) -> None:
    base_dir = _workspace(tmp_path)

    result = CliRunner().invoke(main, ["-C", base_dir, "plan", "--all"])

    assert result.exit_code == 0, result.output
    assert "- project: proj" in result.output
    assert "7. gateway (apigateway.Gateway)" in result.output
    assert "## Raw env from files" in result.output
    assert "- GCP_PROJECT_ID=proj" in result.output


def test_plan_fails_on_empty_required_value(tmp_path, clean_env) -> None:
    base_dir = _workspace(tmp_path)
    (tmp_path / ".env").write_text("GCP_REGION=\n")

    result = CliRunner().invoke(main, ["-C", base_dir, "plan"])

    assert result.exit_code == 1
    assert "missing region argument" in result.output


def test_render_prints_decoded_and_encoded(tmp_path, clean_env) -> None:
    base_dir = _workspace(tmp_path)
    runner = CliRunner()

    decoded = runner.invoke(main, ["-C", base_dir, "render"])
    encoded = runner.invoke(main, ["-C", base_dir, "render", "--encoded"])

    assert decoded.exit_code == 0, decoded.output
    assert decoded.output == "host: europe-west2-proj/function\n"
    assert encoded.exit_code == 0, encoded.output
    assert base64.b64decode(encoded.output.strip()).decode("utf-8") == decoded.output


def test_check_exits_non_zero_when_template_missing(tmp_path, clean_env) -> None:
    base_dir = _workspace(tmp_path)
    (tmp_path / "openapi.yaml").unlink()

    result = CliRunner().invoke(main, ["-C", base_dir, "check"])

    assert result.exit_code == 1
    assert "템플릿 파일을 읽을 수 없습니다" in result.output


def test_check_passes_for_valid_workspace(tmp_path, clean_env) -> None:
    base_dir = _workspace(tmp_path)

    result = CliRunner().invoke(main, ["-C", base_dir, "check", "-a"])

    assert result.exit_code == 0, result.output
    assert "주요 이슈 없음" in result.output


def test_render_decode_flag_and_template_path(tmp_path, clean_env) -> None:
    base_dir = _workspace(tmp_path)
    (tmp_path / "openapi.yaml").write_text("source: {{ path }}\n", encoding="utf-8")
    runner = CliRunner()

    decoded = runner.invoke(main, ["-C", base_dir, "render", "--decode"])
    encoded = runner.invoke(main, ["-C", base_dir, "render", "--encoded"])

    assert decoded.exit_code == 0, decoded.output
    # -C 로 지정한 디렉토리가 문서에 섞이지 않아야 pulumi 로 배포되는 내용과 같다
    assert decoded.output == "source: openapi.yaml\n"
    assert base64.b64decode(encoded.output.strip()) == b"source: openapi.yaml\n"


def test_check_reports_non_utf8_template(tmp_path, clean_env) -> None:
    base_dir = _workspace(tmp_path)
    (tmp_path / "openapi.yaml").write_bytes(b"title: \xff {{ project }}\n")

    result = CliRunner().invoke(main, ["-C", base_dir, "check"])

    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert "템플릿 파일을 읽을 수 없습니다" in result.output
