import argparse
import os
import pytest
from ai_env.pkg_config import pkg_config
from ai_env.utils.config import get_config, str2bool, ConfigError


def test_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cfg = get_config([])
    assert cfg['venv_dir'] == os.path.abspath(os.path.expanduser("~/Virtual_Env/ai"))
    assert cfg['log_dir'] == str(tmp_path)
    assert cfg['base_pkgs'] == pkg_config['base_pkgs']
    assert cfg['torch_stack'] == ["torch", "torchvision", "torchaudio"]
    assert cfg['strict'] is False
    assert cfg['register_kernel'] is True


def test_defaults_are_not_mutated():
    cfg = get_config(["--base_pkgs", "numpy"])
    cfg['ml_pkgs'].append("something")
    assert "something" not in pkg_config['ml_pkgs']
    assert pkg_config['base_pkgs'][0] == "numpy" and len(pkg_config['base_pkgs']) > 1


def test_yaml_then_cli_override(tmp_path):
    yml = tmp_path / "env.yaml"
    yml.write_text(
        "venv_dir: /opt/venvs/ml\n"
        "sudo_cmd: ''\n"
        "base_pkgs: [numpy, pandas]\n"
        "register_kernel: no\n"
    )
    cfg = get_config(["--config", str(yml), "--venv_dir", str(tmp_path / "v")])
    assert cfg['venv_dir'] == str(tmp_path / "v")
    assert cfg['sudo_cmd'] == ""
    assert cfg['base_pkgs'] == ["numpy", "pandas"]
    assert cfg['register_kernel'] is False


def test_empty_yaml_keeps_defaults(tmp_path):
    yml = tmp_path / "empty.yaml"
    yml.write_text("")
    assert get_config(["--config", str(yml)])['ml_pkgs'] == pkg_config['ml_pkgs']


def test_flags():
    cfg = get_config(["--strict", "--register_kernel", "false", "--progress", "0"])
    assert cfg['strict'] is True
    assert cfg['register_kernel'] is False
    assert cfg['progress'] is False


def test_relative_paths_made_absolute(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cfg = get_config(["--log_dir", "logs", "--requirements", "req.txt"])
    assert cfg['log_dir'] == str(tmp_path / "logs")
    assert cfg['requirements'] == str(tmp_path / "req.txt")


@pytest.mark.parametrize("text", [
    "- just\n- a list\n",
    "colour: blue\n",
    "base_pkgs: numpy\n",
    "ml_pkgs: [xgboost, '']\n",
    "strict: maybe\n",
    "venv_dir: [unclosed\n",
    "venv_dir: 42\n",
    "requirements: [a.txt]\n",
    "kernel_name: 7\n",
    "kernel_display_name: [Python]\n",
    "python_bin: ''\n",
    "sudo_cmd: 1\n",
    "log_dir: {a: b}\n",
    "torch_fallback_index: 3.5\n",
])
def test_bad_config_file(tmp_path, text):
    yml = tmp_path / "bad.yaml"
    yml.write_text(text)
    with pytest.raises(ConfigError):
        get_config(["--config", str(yml)])


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigError):
        get_config(["--config", str(tmp_path / "nope.yaml")])


def test_str2bool():
    assert str2bool("Yes") is True
    assert str2bool("t") is True
    assert str2bool("0") is False
    assert str2bool(False) is False
    with pytest.raises(argparse.ArgumentTypeError):
        str2bool("perhaps")


def test_cli_turns_off_strict_from_yaml(tmp_path):
    yml = tmp_path / "strict.yaml"
    yml.write_text("strict: true\n")
    assert get_config(["--config", str(yml)])['strict'] is True
    assert get_config(["--config", str(yml), "--strict", "false"])['strict'] is False
