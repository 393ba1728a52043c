# ai_env/setup_env.py
"""
Create (or reuse) a Python virtual environment and install common ML and
data-science packages into it, then print a summary of what was installed,
skipped and failed. Safe to re-run: packages already present are skipped.

Target OS: Debian/Ubuntu-family (apt is used for missing system packages).

    ai-env-setup --config configs/ai_env.yaml
    ai-env-setup --venv_dir ~/Virtual_Env/ai --strict
"""
import os
import sys
import logging
from tqdm.contrib.logging import logging_redirect_tqdm
from ai_env.utils.config import get_config, ConfigError
from ai_env.utils.io import ensure_dir, make_log_path, setup_logging, is_available_to_store
from ai_env.utils.shell import Shell
from ai_env.modules.system import ensure_system_pip
from ai_env.modules.venv import create_or_reuse_venv
from ai_env.modules.installer import PackageInstaller, InstallReport, read_requirements
from ai_env.modules.report import emit_summary


def install_all(installer, cfg):
    installer.install_many(cfg['base_pkgs'], desc="Base packages")

    # tensorflow may fail on some Python/OS combos; that's OK
    if cfg['tensorflow_pkg']:
        installer.safe_install(cfg['tensorflow_pkg'])

    installer.install_torch_stack(cfg['torch_stack'], cfg['torch_fallback_index'])

    installer.install_many(cfg['ml_pkgs'], desc="ML packages")

    if cfg['requirements']:
        extra = read_requirements(cfg['requirements'])
        logging.info(f"{len(extra)} extra package(s) from {cfg['requirements']}")
        installer.install_many(extra, desc="Requirements")

    if cfg['register_kernel']:
        installer.register_ipykernel(cfg['kernel_name'], cfg['kernel_display_name'])


def run(cfg, shell=None):
    """Run the whole setup with a prepared config. Returns the process exit code."""
    ensure_dir(cfg['log_dir'])
    log_file = make_log_path(cfg['log_dir'])
    setup_logging(log_file)
    shell = shell or Shell(log_file)

    logging.info("=== ML environment setup starting ===")
    logging.info(f"Log file: {log_file}")

    report = InstallReport()
    interrupted = False
    try:
        parent = os.path.dirname(cfg['venv_dir'])
        if not is_available_to_store(parent):
            logging.warning(f"WARNING: less than 10% free disk space under {parent}; large wheels may fail")

        ensure_system_pip(shell, cfg)
        python = create_or_reuse_venv(shell, cfg)

        installer = PackageInstaller(python, shell, report, progress=cfg['progress'])
        with logging_redirect_tqdm():
            install_all(installer, cfg)
    except KeyboardInterrupt:
        interrupted = True
        logging.warning("Setup interrupted by user; summary is partial.")

    emit_summary(report, cfg['venv_dir'], log_file)

    if interrupted:
        return 130
    if cfg['strict'] and report.has_failures:
        return 1
    return 0


def main(argv=None):
    try:
        cfg = get_config(argv)
    except ConfigError as e:
        print(f"ai-env-setup: error: {e}", file=sys.stderr)
        return 2
    return run(cfg)


if __name__ == '__main__':
    sys.exit(main())
