import pytest

from service_kit.config import ServiceConfig, load_env_files
from service_kit.service import ServiceArgs


def test_defaults_match_fixed_entry_point_values(clean_env) -> None:
    cfg = ServiceConfig.from_env()

    assert cfg.gcp_project_id == "project"
    assert cfg.gcp_region == "europe-west2"
    assert cfg.function_source_dir == "pkg/helloworld"
    assert cfg.service_name == "myService"
    assert cfg.function_name == "function"
    assert cfg.openapi_template == "openapi.yaml"


def test_env_overrides_defaults(monkeypatch: pytest.MonkeyPatch, clean_env) -> None:
    monkeypatch.setenv("GCP_PROJECT_ID", "proj")
    monkeypatch.setenv("GCP_REGION", "us-central1")

    cfg = ServiceConfig.from_env()

    assert cfg.to_service_args() == ServiceArgs(
        project="proj", region="us-central1", path="pkg/helloworld"
    )


def test_empty_env_value_is_kept_for_validation(
    monkeypatch: pytest.MonkeyPatch, clean_env
) -> None:
    monkeypatch.setenv("GCP_REGION", "")

    cfg = ServiceConfig.from_env()

    assert cfg.gcp_region == ""


def test_later_env_file_overrides_earlier(tmp_path, clean_env) -> None:
    (tmp_path / ".env").write_text("GCP_PROJECT_ID=first\nGCP_REGION=asia-northeast3\n")
    (tmp_path / ".env.infra").write_text("GCP_PROJECT_ID=second\n")

    load_env_files(str(tmp_path))
    cfg = ServiceConfig.from_env()

    assert cfg.gcp_project_id == "second"
    assert cfg.gcp_region == "asia-northeast3"
