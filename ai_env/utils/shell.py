# ai_env/utils/shell.py
import shutil
import subprocess


class Shell:
    """Runs external commands, sending their output to the run log."""

    def __init__(self, log_file):
        self.log_file = log_file

    def quiet(self, cmd):
        try:
            return subprocess.run(cmd, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL).returncode == 0
        except OSError:
            return False

    def logged(self, cmd):
        with open(self.log_file, 'a', encoding='utf-8') as f:
            f.write("$ " + " ".join(cmd) + "\n")
            f.flush()
            try:
                subprocess.check_call(cmd, stdout=f, stderr=subprocess.STDOUT)
            except subprocess.CalledProcessError as e:
                f.write(f"(exit status {e.returncode})\n")
                return False
            except OSError as e:
                f.write(f"({e})\n")
                return False
        return True

    def which(self, name):
        return shutil.which(name)
