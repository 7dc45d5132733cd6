# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for layered configuration and property binding."""

from dataclasses import dataclass
from pathlib import Path

import pytest
from pydantic import BaseModel, Field

from queryfly.core.config import Config, config_properties


class TestConfig:
    def test_get_top_level_value(self):
        config = Config({"app": {"port": 8080}})
        assert config.get("app.port") == 8080

    def test_get_with_default(self):
        config = Config({})
        assert config.get("missing.key", "default") == "default"

    def test_falsy_values_are_returned(self):
        config = Config({"query": {"strict": False, "offset": 0}})
        assert config.get("query.strict", True) is False
        assert config.get("query.offset", 5) == 0

    def test_get_section(self):
        config = Config({"queryfly": {"query": {"max_page_size": 50}}})
        assert config.get_section("queryfly.query") == {"max_page_size": 50}
        assert config.get_section("queryfly.missing") == {}

    def test_load_from_yaml_file(self, tmp_path: Path):
        config_file = tmp_path / "settings.yaml"
        config_file.write_text("app:\n  name: users-api\n  port: 9090\n")
        config = Config.from_file(config_file, load_defaults=False)
        assert config.get("app.name") == "users-api"
        assert config.loaded_sources == [str(config_file)]

    def test_load_from_toml_file(self, tmp_path: Path):
        config_file = tmp_path / "settings.toml"
        config_file.write_text('[app]\nname = "users-api"\n')
        config = Config.from_file(config_file, load_defaults=False)
        assert config.get("app.name") == "users-api"

    def test_packaged_defaults_are_loaded(self, tmp_path: Path):
        config = Config.from_file(tmp_path / "absent.yaml")
        assert config.get("queryfly.query.max_page_size") == 100
        assert config.get("queryfly.logging.format") == "console"

    def test_env_var_override(self, monkeypatch):
        monkeypatch.setenv("QUERYFLY_QUERY_MAX_PAGE_SIZE", "25")
        config = Config({"queryfly": {"query": {"max_page_size": 100}}})
        assert config.get("queryfly.query.max_page_size") == "25"

    def test_env_var_override_for_kebab_keys(self, monkeypatch):
        monkeypatch.setenv("QUERYFLY_APP_DISPLAY_NAME", "from-env")
        config = Config({"app": {"display-name": "from-file"}})
        assert config.get("app.display-name") == "from-env"


class TestFromSources:
    def test_merges_config_dir_then_root(self, tmp_path: Path):
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "queryfly.yaml").write_text("db:\n  url: config-dir\n  pool: 5\n")
        (tmp_path / "queryfly.yaml").write_text("db:\n  url: root\n")
        config = Config.from_sources(tmp_path, load_defaults=False)
        assert config.get("db.url") == "root"
        assert config.get("db.pool") == 5

    def test_profile_overlay_wins(self, tmp_path: Path):
        (tmp_path / "queryfly.yaml").write_text("db:\n  url: base\n")
        (tmp_path / "queryfly-dev.yaml").write_text("db:\n  url: dev\n")
        config = Config.from_sources(tmp_path, active_profiles=["dev"], load_defaults=False)
        assert config.get("db.url") == "dev"
        assert any("profile: dev" in source for source in config.loaded_sources)


class TestProfileConfigMerging:
    def test_later_profile_wins(self, tmp_path):
        base = tmp_path / "app.yaml"
        base.write_text("db:\n  url: base\n")
        (tmp_path / "app-dev.yaml").write_text("db:\n  url: dev-url\n")
        (tmp_path / "app-local.yaml").write_text("db:\n  url: local-url\n")

        config = Config.from_file(base, active_profiles=["dev", "local"], load_defaults=False)
        assert config.get("db.url") == "local-url"

    def test_missing_profile_file_is_skipped(self, tmp_path):
        base = tmp_path / "app.yaml"
        base.write_text("app:\n  name: test\n")
        config = Config.from_file(base, active_profiles=["nonexistent"], load_defaults=False)
        assert config.get("app.name") == "test"


class TestConfigProperties:
    def test_bind_to_dataclass(self):
        @config_properties(prefix="database")
        @dataclass
        class DatabaseConfig:
            url: str = "sqlite:///test.db"
            pool_size: int = 5

        config = Config({"database": {"url": "postgresql://localhost/mydb", "pool_size": 20}})
        db_config = config.bind(DatabaseConfig)
        assert db_config.url == "postgresql://localhost/mydb"
        assert db_config.pool_size == 20

    def test_bind_accepts_kebab_case_keys(self):
        @config_properties(prefix="database")
        @dataclass
        class DatabaseConfig:
            pool_size: int = 5

        config = Config({"database": {"pool-size": 7}})
        assert config.bind(DatabaseConfig).pool_size == 7

    def test_bind_uses_defaults(self):
        @config_properties(prefix="database")
        @dataclass
        class DatabaseConfig:
            url: str = "sqlite:///default.db"
            pool_size: int = 5

        db_config = Config({}).bind(DatabaseConfig)
        assert db_config.url == "sqlite:///default.db"
        assert db_config.pool_size == 5

    def test_bind_coerces_env_strings(self, monkeypatch):
        @config_properties(prefix="queryfly.query")
        @dataclass
        class Limits:
            max_page_size: int = 100
            strict: bool = False

        monkeypatch.setenv("QUERYFLY_QUERY_MAX_PAGE_SIZE", "30")
        monkeypatch.setenv("QUERYFLY_QUERY_STRICT", "true")
        limits = Config({}).bind(Limits)
        assert limits.max_page_size == 30
        assert limits.strict is True

    def test_bind_pydantic_model(self):
        @config_properties(prefix="server")
        class ServerConfig(BaseModel):
            port: int = Field(default=8080, ge=1, le=65535)

        assert Config({"server": {"port": 9000}}).bind(ServerConfig).port == 9000

    def test_bind_pydantic_model_fails_fast(self):
        @config_properties(prefix="server")
        class ServerConfig(BaseModel):
            port: int = Field(default=8080, ge=1, le=65535)

        with pytest.raises(ValueError, match="Configuration validation failed"):
            Config({"server": {"port": 0}}).bind(ServerConfig)

    def test_bind_undecorated_class_raises(self):
        @dataclass
        class Plain:
            value: int = 1

        with pytest.raises(ValueError, match="not decorated"):
            Config({}).bind(Plain)
