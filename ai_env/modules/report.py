# ai_env/modules/report.py
from ai_env.utils.io import append_lines

RULE_TOP = "=" * 20 + " Summary " + "=" * 20
RULE_BOTTOM = "=" * len(RULE_TOP)


def _section(title, items):
    lines = [f"{title}: {len(items)}"]
    lines.extend(f"  - {item}" for item in items)
    return lines


def format_summary(report, venv_dir):
    lines = [RULE_TOP]
    lines += _section("Installed successfully", report.installed)
    lines += _section("Skipped (already present in venv)", report.skipped)
    lines += _section("Failed installs", [f"{pkg} : {reason}" for pkg, reason in report.failed])
    lines += [
        f"Venv location: {venv_dir}",
        f'Activate with: source "{venv_dir}/bin/activate"',
        RULE_BOTTOM,
    ]
    return lines


def emit_summary(report, venv_dir, log_file):
    """Print the summary and append it to the log; the log pointer goes to the console only."""
    lines = format_summary(report, venv_dir)
    print()
    failures_end = lines.index("Venv location: " + venv_dir)
    for i, line in enumerate(lines):
        if i == failures_end and report.has_failures:
            print(f"See detailed logs: {log_file}")
        print(line)
    append_lines(log_file, lines)
    return lines
