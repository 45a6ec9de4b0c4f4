"""Tests for gitflow-sdk configuration."""

import pytest

from gitflow_sdk import (
    DEFAULT_CONFIG,
    HOTFIX,
    RELEASE,
    ConfigError,
    GitConfigProvider,
    MappingConfigProvider,
    WorkflowConfig,
)

from conftest import TEST_CONFIG


class TestWorkflowConfig:
    """Test WorkflowConfig snapshot."""

    def test_from_mapping(self):
        config = WorkflowConfig.from_mapping(TEST_CONFIG)

        assert config.master_branch == "master"
        assert config.develop_branch == "develop"
        assert config.hotfix_prefix == "hotfix/"
        assert config.release_prefix == "release/"
        assert config.version_tag_prefix == "v"

    def test_kind_specific_names(self):
        config = WorkflowConfig.from_mapping(TEST_CONFIG)

        assert config.branch_name(HOTFIX, "1.0.1") == "hotfix/1.0.1"
        assert config.branch_name(RELEASE, "2.0") == "release/2.0"
        assert config.base_branch(HOTFIX) == "master"
        assert config.base_branch(RELEASE) == "develop"

    def test_tag_name(self):
        config = WorkflowConfig.from_mapping(TEST_CONFIG)
        assert config.tag_name("1.0") == "v1.0"

    def test_empty_tag_prefix(self):
        config = WorkflowConfig.from_mapping(DEFAULT_CONFIG)
        assert config.tag_name("1.0") == "1.0"

    def test_missing_key(self):
        values = dict(TEST_CONFIG)
        del values["gitflow.prefix.hotfix"]

        with pytest.raises(ConfigError) as exc_info:
            WorkflowConfig.from_mapping(values)
        assert exc_info.value.key == "gitflow.prefix.hotfix"

    def test_empty_branch_name(self):
        values = dict(TEST_CONFIG, **{"gitflow.branch.master": "  "})
        with pytest.raises(ConfigError, match="gitflow.branch.master"):
            WorkflowConfig.from_mapping(values)

    def test_config_is_frozen(self):
        config = WorkflowConfig.from_mapping(TEST_CONFIG)
        with pytest.raises(AttributeError):
            config.master_branch = "main"

    def test_to_dict_roundtrip(self):
        config = WorkflowConfig.from_mapping(TEST_CONFIG)
        assert WorkflowConfig.from_mapping(config.to_dict()) == config


class TestWorkflowKinds:
    """Test built-in workflow descriptors."""

    def test_hotfix(self):
        assert HOTFIX.name == "hotfix"
        assert HOTFIX.prefix_key == "gitflow.prefix.hotfix"
        assert HOTFIX.base_branch_key == "gitflow.branch.master"
        assert HOTFIX.accepts_start_sha is False

    def test_release(self):
        assert RELEASE.name == "release"
        assert RELEASE.prefix_key == "gitflow.prefix.release"
        assert RELEASE.base_branch_key == "gitflow.branch.develop"
        assert RELEASE.accepts_start_sha is True


class TestMappingConfigProvider:
    """Test fixed-mapping provider."""

    @pytest.mark.asyncio
    async def test_defaults(self):
        provider = MappingConfigProvider()
        assert await provider.get_config("/repo") == DEFAULT_CONFIG

    @pytest.mark.asyncio
    async def test_nested_sections(self):
        provider = MappingConfigProvider(
            {
                "gitflow": {
                    "branch": {"master": "main", "develop": "dev"},
                    "prefix": {"hotfix": "hf/", "release": "rel/", "versiontag": None},
                }
            }
        )

        config = await provider.get_config("/repo")

        assert config == {
            "gitflow.branch.master": "main",
            "gitflow.branch.develop": "dev",
            "gitflow.prefix.hotfix": "hf/",
            "gitflow.prefix.release": "rel/",
            "gitflow.prefix.versiontag": "",
        }

    @pytest.mark.asyncio
    async def test_returns_copy(self):
        provider = MappingConfigProvider(TEST_CONFIG)
        config = await provider.get_config("/repo")
        config["gitflow.branch.master"] = "changed"

        assert (await provider.get_config("/repo"))["gitflow.branch.master"] == "master"

    @pytest.mark.asyncio
    async def test_from_yaml(self, tmp_path):
        path = tmp_path / "gitflow.yml"
        path.write_text(
            "gitflow:\n"
            "  branch:\n"
            "    master: main\n"
            "    develop: develop\n"
            "  prefix:\n"
            "    hotfix: hotfix/\n"
            "    release: release/\n"
            "    versiontag: v\n",
            encoding="utf-8",
        )

        provider = MappingConfigProvider.from_yaml(path)
        config = WorkflowConfig.from_mapping(await provider.get_config("/repo"))

        assert config.master_branch == "main"
        assert config.tag_name("3.1") == "v3.1"

    @pytest.mark.asyncio
    async def test_from_yaml_flat_keys(self, tmp_path):
        path = tmp_path / "gitflow.yml"
        path.write_text('gitflow.branch.master: trunk\n"gitflow.prefix.versiontag": ""\n')

        config = await MappingConfigProvider.from_yaml(path).get_config("/repo")

        assert config == {
            "gitflow.branch.master": "trunk",
            "gitflow.prefix.versiontag": "",
        }

    def test_from_yaml_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="cannot load"):
            MappingConfigProvider.from_yaml(tmp_path / "missing.yml")

    def test_from_yaml_not_a_mapping(self, tmp_path):
        path = tmp_path / "gitflow.yml"
        path.write_text("- master\n- develop\n")

        with pytest.raises(ConfigError, match="must contain a mapping"):
            MappingConfigProvider.from_yaml(path)

    def test_from_yaml_invalid(self, tmp_path):
        path = tmp_path / "gitflow.yml"
        path.write_text("gitflow: [unclosed\n")

        with pytest.raises(ConfigError):
            MappingConfigProvider.from_yaml(path)


class TestGitConfigProvider:
    """Test reading git-flow configuration from git config."""

    @pytest.mark.asyncio
    async def test_get_config(self, git_repo):
        config = await GitConfigProvider().get_config(git_repo)

        for key, value in TEST_CONFIG.items():
            assert config[key] == value

    @pytest.mark.asyncio
    async def test_get_config_uninitialized(self, git_repo, git):
        git(git_repo, "config", "--remove-section", "gitflow.branch")
        git(git_repo, "config", "--remove-section", "gitflow.prefix")

        assert await GitConfigProvider().get_config(git_repo) == {}

    @pytest.mark.asyncio
    async def test_initialize_writes_defaults(self, git_repo, git):
        git(git_repo, "config", "--remove-section", "gitflow.branch")
        git(git_repo, "config", "--remove-section", "gitflow.prefix")

        config = await GitConfigProvider().initialize(git_repo)

        assert config == DEFAULT_CONFIG
        assert git(git_repo, "config", "gitflow.prefix.hotfix") == "hotfix/"

    @pytest.mark.asyncio
    async def test_initialize_keeps_existing_values(self, git_repo):
        provider = GitConfigProvider()

        config = await provider.initialize(git_repo, {"gitflow.prefix.versiontag": "release-"})
        assert config["gitflow.prefix.versiontag"] == "v"

        config = await provider.initialize(
            git_repo, {"gitflow.prefix.versiontag": "release-"}, force=True
        )
        assert config["gitflow.prefix.versiontag"] == "release-"
