# ai_env/modules/venv.py
import os
import logging
from ai_env.modules.system import apt_install_if_missing


def venv_python(venv_dir):
    return os.path.join(venv_dir, "bin", "python")


def needs_creation(venv_dir):
    py = venv_python(venv_dir)
    return not os.path.isdir(venv_dir) or not os.access(py, os.X_OK)


def create_or_reuse_venv(shell, cfg):
    """
    Make sure the virtual environment exists and has an up-to-date pip.

    Every failure here is logged and the run continues; a broken venv shows up
    later as failed pip installs in the summary.

    Returns:
        str: Path of the venv interpreter used for all later pip calls.
    """
    venv_dir = cfg['venv_dir']
    python_bin = cfg['python_bin']
    os.makedirs(os.path.dirname(venv_dir), exist_ok=True)

    if needs_creation(venv_dir):
        logging.info(f"Creating virtual environment: {venv_dir}")
        if shell.which(python_bin) is None:
            logging.info(f"{python_bin} not found; installing...")
            if not apt_install_if_missing(shell, cfg, "python3"):
                logging.warning("WARNING: failed to install python3")
        if not shell.quiet([python_bin, "-m", "venv", "--help"]):
            logging.info("python3-venv missing; installing...")
            if not apt_install_if_missing(shell, cfg, "python3-venv"):
                logging.warning("WARNING: failed to install python3-venv")
        if not shell.logged([python_bin, "-m", "venv", venv_dir]):
            logging.info("Attempting to install ensurepip into venv...")
            shell.logged([python_bin, "-m", "ensurepip", "--upgrade"])
            if not shell.logged([python_bin, "-m", "venv", venv_dir]):
                logging.warning("WARNING: venv creation had issues (continuing)")
    else:
        logging.info(f"Virtual environment already exists: {venv_dir} (reusing)")

    py = venv_python(venv_dir)
    if not shell.quiet([py, "-m", "pip", "--version"]):
        logging.info("pip missing in venv; bootstrapping with ensurepip...")
        shell.logged([py, "-m", "ensurepip", "--upgrade"])

    logging.info("Upgrading pip/setuptools/wheel in venv")
    if not shell.logged([py, "-m", "pip", "install", "--upgrade", "pip", "setuptools", "wheel"]):
        logging.warning("WARNING: failed to upgrade pip/setuptools/wheel")
    return py
