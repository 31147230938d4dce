import re
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from bmcbuilder import constants
from bmcbuilder.config import Config, HostInfo, ProxySettings
from bmcbuilder.exceptions import (
    ConfigFileMissingError,
    ConfigParsingError,
    ConfigValidationError,
    UnsupportedArchitectureError,
)


@pytest.fixture
def create_params_file(tmp_path: Path):
    """A pytest fixture to create a temporary parameters file."""
    def _create_file(data) -> Path:
        params_file = tmp_path / "params.yml"
        with open(params_file, 'w') as f:
            yaml.dump(data, f)
        return params_file
    return _create_file


class TestDefaults:
    """Every parameter left unset falls back to its documented default."""

    def test_static_defaults(self, make_config):
        params = make_config().params
        assert params.distro == "ubuntu"
        assert params.img_tag == "latest"
        assert params.target == "qemu"
        assert params.launch == ""
        assert params.http_proxy == ""
        assert params.build_dir == "/tmp/openbmc"
        assert params.xtrct_small_copy_dir == "deploy/images"
        assert params.xtrct_copy_timeout == 300
        assert params.bitbake_opts == ""
        assert params.proxy is None

    def test_computed_defaults(self, make_config, host):
        params = make_config().params
        assert params.workspace.parent == host.home
        assert re.fullmatch(r"\d+", params.workspace.name)
        assert params.num_cpu == host.cpus
        assert params.ssc_dir == host.home
        assert params.obmc_dir == params.workspace / "openbmc"
        assert params.xtrct_path == params.obmc_dir / "build" / "tmp"
        assert params.build_scripts_dir == Path.cwd()

    def test_default_image_name_follows_distro_tag_target_and_arch(self, make_config):
        params = make_config({"distro": "fedora", "img_tag": "25", "target": "romulus"}).params
        assert params.img_name == "openbmc/fedora:25-romulus-x86_64"

    def test_dependent_defaults_follow_workspace(self, make_config, tmp_path):
        params = make_config({"WORKSPACE": str(tmp_path / "ws")}).params
        assert params.obmc_dir == tmp_path / "ws" / "openbmc"
        assert params.xtrct_path == tmp_path / "ws" / "openbmc" / "build" / "tmp"


class TestSources:
    """Environment, YAML file and overrides, and how they stack."""

    def test_environment_values_are_used(self, make_config, tmp_path):
        params = make_config({
            "target": "witherspoon",
            "launch": "pod",
            "num_cpu": "4",
            "xtrct_copy_timeout": "60",
            "BITBAKE_OPTS": "-c populate_sdk",
            "http_proxy": "http://proxy.example.com:3128",
        }).params
        assert params.target == "witherspoon"
        assert params.launch == "pod"
        assert params.num_cpu == 4
        assert params.xtrct_copy_timeout == 60
        assert params.bitbake_opts == "-c populate_sdk"
        assert params.proxy == ProxySettings(url="http://proxy.example.com:3128", host="proxy.example.com", port=3128)

    def test_empty_environment_values_count_as_unset(self, make_config):
        params = make_config({"distro": "", "xtrct_small_copy_dir": "", "target": ""}).params
        assert params.distro == "ubuntu"
        assert params.xtrct_small_copy_dir == "deploy/images"
        assert params.target == "qemu"

    def test_overrides_beat_environment(self, make_config):
        params = make_config({"target": "zaius"}, target="palmetto").params
        assert params.target == "palmetto"

    def test_explicit_empty_copy_dir_is_honoured(self, make_config):
        params = make_config(xtrct_small_copy_dir="").params
        assert params.xtrct_small_copy_dir == ""

    def test_absolute_copy_dir_is_made_relative(self, make_config):
        params = make_config({"xtrct_small_copy_dir": "/deploy/images"}).params
        assert params.xtrct_small_copy_dir == "deploy/images"

    def test_explicit_empty_launch_overrides_environment(self, make_config):
        params = make_config({"launch": "job"}, launch="").params
        assert params.launch == ""

    def test_empty_launch_in_environment_counts_as_unset(self, make_config, create_params_file):
        params_file = create_params_file({"launch": "pod"})
        params = make_config({"launch": ""}, config_file=str(params_file)).params
        assert params.launch == "pod"

    def test_parameters_file_is_lowest_precedence(self, make_config, create_params_file):
        params_file = create_params_file({"target": "romulus", "img_tag": "16.04"})
        params = make_config({"img_tag": "18.04"}, config_file=str(params_file)).params
        assert params.target == "romulus"
        assert params.img_tag == "18.04"

    def test_parameters_file_accepts_environment_names(self, make_config, create_params_file, tmp_path):
        params_file = create_params_file({"WORKSPACE": str(tmp_path / "ws"), "BITBAKE_OPTS": "-k"})
        params = make_config(config_file=str(params_file)).params
        assert params.workspace == tmp_path / "ws"
        assert params.bitbake_opts == "-k"

    def test_empty_parameters_file_is_allowed(self, make_config, tmp_path):
        params_file = tmp_path / "empty.yml"
        params_file.write_text("")
        assert make_config(config_file=str(params_file)).params.target == "qemu"


class TestValidation:

    def test_unknown_distro_raises_error(self, make_config):
        with pytest.raises(ConfigValidationError, match="distro"):
            make_config({"distro": "arch"})

    @pytest.mark.parametrize("env", [
        {"num_cpu": "0"},
        {"num_cpu": "many"},
        {"xtrct_copy_timeout": "-5"},
    ])
    def test_invalid_numbers_raise_error(self, make_config, env):
        with pytest.raises(ConfigValidationError):
            make_config(env)

    def test_unknown_key_in_file_raises_error(self, make_config, create_params_file):
        params_file = create_params_file({"colour": "blue"})
        with pytest.raises(ConfigValidationError, match="colour"):
            make_config(config_file=str(params_file))

    def test_missing_file_raises_error(self, make_config, tmp_path):
        with pytest.raises(ConfigFileMissingError):
            make_config(config_file=str(tmp_path / "missing.yml"))

    def test_invalid_yaml_raises_error(self, make_config, tmp_path):
        params_file = tmp_path / "invalid.yml"
        params_file.write_text("key: value: another")
        with pytest.raises(ConfigParsingError, match="Error parsing YAML file"):
            make_config(config_file=str(params_file))

    def test_non_mapping_yaml_raises_error(self, make_config, tmp_path):
        params_file = tmp_path / "list.yml"
        params_file.write_text("- qemu\n- romulus\n")
        with pytest.raises(ConfigParsingError, match="dictionary"):
            make_config(config_file=str(params_file))

    @pytest.mark.parametrize("opts", ["-c 'populate_sdk", "-c \"populate_sdk", "-k \\"])
    def test_unsplittable_bitbake_opts_raise_error(self, make_config, opts):
        with pytest.raises(ConfigValidationError, match="bitbake_opts"):
            make_config({"BITBAKE_OPTS": opts})

    def test_malformed_proxy_raises_error(self, make_config):
        with pytest.raises(ConfigValidationError, match="proxy"):
            make_config({"http_proxy": "http://proxy.example.com:notaport"})

    def test_parameters_are_immutable(self, make_config):
        params = make_config().params
        with pytest.raises(ValidationError):
            params.target = "romulus"


class TestProxySettings:

    @pytest.mark.parametrize("url, host, port", [
        ("http://proxy.example.com:3128", "proxy.example.com", 3128),
        ("http://10.0.0.1:8080/", "10.0.0.1", 8080),
        ("https://proxy.example.com", "proxy.example.com", 443),
        ("http://proxy.example.com", "proxy.example.com", 80),
        ("proxy.example.com:3128", "proxy.example.com", 3128),
    ])
    def test_from_url(self, url, host, port):
        proxy = ProxySettings.from_url(url)
        assert (proxy.host, proxy.port) == (host, port)


class TestHostInfo:

    def test_detect_rejects_unsupported_architecture(self, monkeypatch):
        monkeypatch.setattr("bmcbuilder.config.platform.machine", lambda: "armv7l")
        with pytest.raises(UnsupportedArchitectureError, match="armv7l"):
            HostInfo.detect()

    @pytest.mark.parametrize("arch, prefix", [("x86_64", ""), ("ppc64le", "ppc64le/")])
    def test_detect_supported_architectures(self, monkeypatch, arch, prefix):
        monkeypatch.setattr("bmcbuilder.config.platform.machine", lambda: arch)
        host = HostInfo.detect()
        assert host.arch == arch
        assert host.image_prefix == prefix


def test_detect_counts_cpus_available_to_the_process(monkeypatch):
    monkeypatch.setattr("bmcbuilder.config.platform.machine", lambda: "x86_64")
    monkeypatch.setattr("bmcbuilder.config.os.cpu_count", lambda: 64)
    monkeypatch.setattr("bmcbuilder.config.os.sched_getaffinity", lambda pid: {0, 1, 2}, raising=False)
    assert HostInfo.detect().cpus == 3


def test_detect_falls_back_to_cpu_count(monkeypatch):
    monkeypatch.setattr("bmcbuilder.config.platform.machine", lambda: "x86_64")
    monkeypatch.setattr("bmcbuilder.config.os.cpu_count", lambda: 6)
    monkeypatch.delattr("bmcbuilder.config.os.sched_getaffinity", raising=False)
    assert HostInfo.detect().cpus == 6


def test_to_env_uses_environment_names(make_config):
    env = make_config({"BITBAKE_OPTS": "-k", "launch": "job"}).params.to_env()
    assert set(env) == set(constants.PARAM_ENV_VARS.values())
    assert env["BITBAKE_OPTS"] == "-k"
    assert env["launch"] == "job"
    assert env["xtrct_copy_timeout"] == "300"


def test_config_reads_process_environment(monkeypatch, clean_environ, host):
    monkeypatch.setenv("target", "s2600wf")
    assert Config(host=host).params.target == "s2600wf"
