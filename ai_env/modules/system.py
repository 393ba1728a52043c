# ai_env/modules/system.py
import logging


def _sudo(cfg):
    return [cfg['sudo_cmd']] if cfg['sudo_cmd'] else []


def apt_install_if_missing(shell, cfg, pkg):
    """Install a Debian package with apt unless dpkg already knows it. Returns success."""
    if shell.quiet(["dpkg", "-s", pkg]):
        logging.info(f"System package already installed (skipping): {pkg}")
        return True
    if not cfg['system_packages']:
        logging.warning(f"WARNING: system package {pkg} missing and system package installs are disabled")
        return False

    logging.info(f"Installing system package: {pkg}")
    shell.logged(_sudo(cfg) + ["apt-get", "update", "-y"])  # failure ignored
    return shell.logged(_sudo(cfg) + ["apt-get", "install", "-y", pkg])


def ensure_system_pip(shell, cfg):
    if shell.which("pip3") is None:
        logging.info("System pip3 not found; installing python3-pip")
        if not apt_install_if_missing(shell, cfg, "python3-pip"):
            logging.warning("WARNING: failed to install python3-pip (venv pip should still work)")
    else:
        logging.info("System pip3 detected")
