# ai_env/utils/config.py
import argparse
import copy
import os
import yaml
from ai_env.pkg_config import pkg_config, LIST_KEYS, BOOL_KEYS, STR_KEYS, OPTIONAL_STR_KEYS


class ConfigError(Exception):
    pass


def str2bool(v):
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        if v.lower() in ('yes', 'true', 't', 'y', '1'):
            return True
        elif v.lower() in ('no', 'false', 'f', 'n', '0'):
            return False
    raise argparse.ArgumentTypeError('Boolean value expected.')


def build_parser():
    parser = argparse.ArgumentParser(
        prog="ai-env-setup",
        description="Create (or reuse) a Python virtual environment and install common ML packages."
    )

    # Config file
    parser.add_argument("--config", type=str, required=False, help="Path to the YAML configuration file.")

    # Override specific parameters if needed
    parser.add_argument("--venv_dir", type=str, help="Virtual environment path.")
    parser.add_argument("--python_bin", type=str, help="Interpreter used to create the venv.")
    parser.add_argument("--sudo_cmd", type=str, help="Prefix for apt commands ('' to disable).")
    parser.add_argument("--log_dir", type=str, help="Directory for the run log.")
    parser.add_argument("--base_pkgs", type=str, nargs='+', help="Base pip packages.")
    parser.add_argument("--ml_pkgs", type=str, nargs='+', help="Remaining ML pip packages.")
    parser.add_argument("--torch_fallback_index", type=str, help="Index URL for the PyTorch retry.")
    parser.add_argument("--requirements", type=str, help="Extra packages, one per line (requirements.txt style).")
    parser.add_argument("--kernel_name", type=str, help="Jupyter kernel name.")
    parser.add_argument("--kernel_display_name", type=str, help="Jupyter kernel display name.")

    # Flags
    parser.add_argument("--register_kernel", type=str2bool, nargs='?', const=True, default=None,
                        help="Whether to register a Jupyter kernel for the venv.")
    parser.add_argument("--system_packages", type=str2bool, nargs='?', const=True, default=None,
                        help="Whether apt may be used to install missing system packages.")
    parser.add_argument("--progress", type=str2bool, nargs='?', const=True, default=None,
                        help="Whether to show progress bars.")
    parser.add_argument("--strict", type=str2bool, nargs='?', const=True, default=None,
                        help="Exit with status 1 when any package failed to install.")
    return parser


def _check(cfg):
    unknown = sorted(set(cfg) - set(pkg_config))
    if unknown:
        raise ConfigError(f"Unknown configuration key(s): {', '.join(unknown)}")
    for key in LIST_KEYS:
        value = cfg[key]
        if not isinstance(value, list) or not all(isinstance(p, str) and p.strip() for p in value):
            raise ConfigError(f"'{key}' must be a list of package names")
        cfg[key] = [p.strip() for p in value]
    for key in BOOL_KEYS:
        try:
            cfg[key] = str2bool(cfg[key])
        except argparse.ArgumentTypeError:
            raise ConfigError(f"'{key}' must be a boolean, got {cfg[key]!r}")
    for key in STR_KEYS:
        if not isinstance(cfg[key], str) or not cfg[key].strip():
            raise ConfigError(f"'{key}' must be a non-empty string, got {cfg[key]!r}")
    for key in OPTIONAL_STR_KEYS:
        if cfg[key] is not None and not isinstance(cfg[key], str):
            raise ConfigError(f"'{key}' must be a string or null, got {cfg[key]!r}")
    if cfg['sudo_cmd'] is None:
        cfg['sudo_cmd'] = ""


def get_config(argv=None):
    args = build_parser().parse_args(argv)

    # Start from the built-in defaults
    cfg = copy.deepcopy(pkg_config)

    # If a YAML config file is provided, load it
    if args.config:
        try:
            with open(args.config, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"Cannot read config file {args.config}: {e}")
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {args.config}: {e}")
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError(f"{args.config} must contain a mapping at the top level")
        cfg.update(loaded)

    # Override config with command-line arguments if provided
    for key, value in vars(args).items():
        if value is not None and key != "config":
            cfg[key] = value

    _check(cfg)

    # Ensure paths are absolute
    cfg['venv_dir'] = os.path.abspath(os.path.expanduser(cfg['venv_dir']))
    cfg['log_dir'] = os.path.abspath(os.path.expanduser(cfg['log_dir'] or os.getcwd()))
    if cfg['requirements']:
        cfg['requirements'] = os.path.abspath(os.path.expanduser(cfg['requirements']))

    return cfg
