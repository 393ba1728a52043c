# ai_env/modules/installer.py
import re
import logging
from tqdm import tqdm

PIP_FAILED = "pip install failed (see log)"


def dist_name(requirement):
    # "numpy>=1.24" -> "numpy", "dask[complete]" -> "dask"
    return re.split(r"[<>=~!;\[\s]", requirement.strip(), 1)[0]


class InstallReport:
    def __init__(self):
        self.installed = []
        self.skipped = []
        self.failed = []  # (package, reason)

    def mark_installed(self, pkg):
        # a later attempt succeeded, drop the earlier failure
        self.clear_failure(pkg)
        if pkg not in self.installed:
            self.installed.append(pkg)

    def mark_skipped(self, pkg):
        # already counted if installed earlier in this run
        if pkg not in self.installed and pkg not in self.skipped:
            self.skipped.append(pkg)

    def mark_failed(self, pkg, reason=PIP_FAILED):
        self.clear_failure(pkg)
        self.failed.append((pkg, reason))

    def clear_failure(self, pkg):
        self.failed = [(p, r) for p, r in self.failed if p != pkg]

    def is_failed(self, pkg):
        return any(p == pkg for p, _ in self.failed)

    @property
    def has_failures(self):
        return bool(self.failed)


class PackageInstaller:
    """pip operations against the venv interpreter, recording every outcome in a report."""

    def __init__(self, python, shell, report=None, progress=True):
        self.python = python
        self.shell = shell
        self.report = report if report is not None else InstallReport()
        self.progress = progress

    def pip(self, *args):
        return [self.python, "-m", "pip"] + list(args)

    def is_installed(self, pkg):
        return self.shell.quiet(self.pip("show", dist_name(pkg)))

    def safe_install(self, pkg, *extra_args):
        if self.is_installed(pkg):
            self.report.mark_skipped(pkg)
            logging.info(f"pip: {pkg} already installed (skipping)")
            return True

        logging.info(f"pip install: {' '.join((pkg,) + extra_args)}")
        if self.shell.logged(self.pip("install", pkg, *extra_args)):
            self.report.mark_installed(pkg)
            return True
        self.report.mark_failed(pkg)
        logging.error(f"ERROR: pip install failed for {pkg}")
        return False

    def install_many(self, pkgs, desc="pip install"):
        for pkg in tqdm(pkgs, desc=desc, disable=not self.progress):
            self.safe_install(pkg)

    def install_torch_stack(self, stack, index_url):
        """
        Install the PyTorch packages from the default index, retrying the whole
        stack against ``index_url`` when any of them fails.

        The whole stack is reinstalled from the fallback index so torch,
        torchvision and torchaudio come from the same wheel set.

        Args:
            stack (list): Package names, torch first.
            index_url (str): Alternate index, e.g. the CPU wheel index.
        """
        need_fallback = False
        for p in stack:
            if not self.safe_install(p):
                need_fallback = True

        if not need_fallback:
            return

        logging.info("Attempting PyTorch CPU wheel index fallback...")
        for p in stack:
            if self.shell.logged(self.pip("install", "--index-url", index_url, p)):
                if p not in self.report.installed and p not in self.report.skipped:
                    self.report.mark_installed(p)
                self.report.clear_failure(p)
                logging.info(f"Installed via PyTorch CPU index: {p}")
            else:
                logging.error(f"ERROR: Fallback also failed for {p}")

    def register_ipykernel(self, name, display_name):
        if not self.safe_install("ipykernel"):
            return False
        cmd = [self.python, "-m", "ipykernel", "install", "--user",
               "--name", name, "--display-name", display_name]
        if not self.shell.logged(cmd):
            logging.warning("WARNING: ipykernel registration failed (continuing)")
            return False
        logging.info(f"Registered Jupyter kernel '{name}' ({display_name})")
        return True


def read_requirements(requirements_file):
    pkgs = []
    try:
        with open(requirements_file, 'r', encoding='utf-8') as file:
            for line in file:
                package = re.sub(r"\s+#.*$", "", line).strip()
                if not package or package.startswith('#'):
                    continue
                if package.startswith('-'):
                    logging.warning(f"WARNING: unsupported requirements option skipped: {package}")
                    continue
                pkgs.append(package)
    except OSError as e:
        logging.error(f"ERROR: cannot read requirements file {requirements_file}: {e}")
    return pkgs
