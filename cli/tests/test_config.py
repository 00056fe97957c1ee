import pytest

from tropipay_cli import config


def _use_tmp_config_dir(tmp_path, monkeypatch) -> None:
    def _config_dir(_: str) -> str:
        return str(tmp_path)

    monkeypatch.setattr(config, "user_config_dir", _config_dir)
    monkeypatch.chdir(tmp_path)
    for key in (config.ENV_CLIENT_ID, config.ENV_CLIENT_SECRET, config.ENV_ENVIRONMENT, config.ENV_BASE_URL):
        # setenv first so teardown also drops anything a .env exported
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


def test_save_and_load_round_trip(tmp_path, monkeypatch) -> None:
    _use_tmp_config_dir(tmp_path, monkeypatch)
    cfg = config.AppConfig(
        environment="sandbox",
        auth=config.AuthConfig(client_id="cid", client_secret="secret"),
        timeout_s=12.5,
    )

    path = config.save_config(cfg)
    contents = tmp_path.joinpath("config.toml").read_text(encoding="utf-8")
    loaded = config.load_config()

    assert path.endswith("config.toml")
    assert "base_url" not in contents
    assert loaded.environment == "sandbox"
    assert loaded.auth.client_id == "cid"
    assert loaded.auth.client_secret == "secret"
    assert loaded.timeout_s == 12.5


def test_missing_file_gives_defaults(tmp_path, monkeypatch) -> None:
    _use_tmp_config_dir(tmp_path, monkeypatch)
    cfg = config.load_config()
    assert cfg.environment == "production"
    assert config.resolve_base_url(cfg) == "https://www.tropipay.com/api/v3"


def test_env_vars_override_file(tmp_path, monkeypatch) -> None:
    _use_tmp_config_dir(tmp_path, monkeypatch)
    tmp_path.joinpath("config.toml").write_text(
        '\n'.join(
            [
                'environment = "production"',
                "",
                "[auth]",
                'client_id = "file-id"',
                'client_secret = "file-secret"',
                "",
            ]
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv(config.ENV_CLIENT_SECRET, "env-secret")
    monkeypatch.setenv(config.ENV_ENVIRONMENT, "SANDBOX")

    cfg = config.load_config()

    assert cfg.auth.client_id == "file-id"
    assert cfg.auth.client_secret == "env-secret"
    assert config.resolve_base_url(cfg) == "https://sandbox.tropipay.me/api/v3"


def test_env_base_url_selects_custom_environment() -> None:
    cfg = config.apply_env(config.default_config(), {config.ENV_BASE_URL: "proxy.example.test/api/v3/"})
    assert cfg.environment == "custom"
    assert config.resolve_base_url(cfg) == "https://proxy.example.test/api/v3"


def test_custom_environment_requires_base_url() -> None:
    cfg = config.default_config()
    cfg.environment = "custom"
    with pytest.raises(config.ConfigError, match="base_url"):
        config.resolve_base_url(cfg)


def test_normalize_environment_rejects_unknown() -> None:
    assert config.normalize_environment(" Sandbox ") == "sandbox"
    assert config.normalize_environment(None) == "production"
    with pytest.raises(config.ConfigError):
        config.normalize_environment("staging")


def test_normalize_base_url_defaults_to_https() -> None:
    assert config.normalize_base_url("example.com") == "https://example.com"


def test_normalize_base_url_defaults_to_http_for_localhost() -> None:
    assert config.normalize_base_url("127.0.0.1:8010") == "http://127.0.0.1:8010"


def test_normalize_base_url_strips_trailing_slash() -> None:
    assert config.normalize_base_url("https://example.com/") == "https://example.com"


def test_dotenv_in_working_directory_supplies_credentials(tmp_path, monkeypatch) -> None:
    _use_tmp_config_dir(tmp_path, monkeypatch)
    tmp_path.joinpath(".env").write_text(
        f"{config.ENV_CLIENT_ID}=dotenv-id\n{config.ENV_CLIENT_SECRET}=dotenv-secret\n",
        encoding="utf-8",
    )
    monkeypatch.setenv(config.ENV_CLIENT_SECRET, "process-secret")

    cfg = config.load_config()

    assert cfg.auth.client_id == "dotenv-id"
    assert cfg.auth.client_secret == "process-secret"


def test_load_file_config_ignores_environment(tmp_path, monkeypatch) -> None:
    _use_tmp_config_dir(tmp_path, monkeypatch)
    tmp_path.joinpath("config.toml").write_text('environment = "sandbox"\n', encoding="utf-8")
    monkeypatch.setenv(config.ENV_CLIENT_SECRET, "env-secret")
    monkeypatch.setenv(config.ENV_BASE_URL, "https://proxy.example.test")

    cfg = config.load_file_config()

    assert cfg.environment == "sandbox"
    assert cfg.auth.client_secret == ""
    assert cfg.base_url == ""
